"""
Field derivation.

Adds computed fields to a Dataset, returning a new Dataset. The input is
never modified.
"""

from collections.abc import Sequence

from claimload.errors import SchemaMismatchError
from claimload.features.definitions import Derivation
from claimload.schemas.dataset import Dataset
from claimload.utils.logging import get_logger

log = get_logger(__name__)


def derive_fields(dataset: Dataset, derivations: Sequence[Derivation]) -> Dataset:
    """
    Compute derived fields for every record.

    Derivations run in order, so a later derivation may read a field added
    by an earlier one.

    Args:
        dataset: Source dataset.
        derivations: Derivations to apply.

    Returns:
        New Dataset with one additional column per derivation.

    Raises:
        SchemaMismatchError: If a derived name already exists.
        KeyError: If a derivation reads a field the dataset does not have.
    """
    if not derivations:
        return dataset

    schema = dataset.schema
    records = list(dataset.records())
    frame = dataset.frame.copy()

    for derivation in derivations:
        if derivation.name in schema:
            raise SchemaMismatchError(
                None, f"derived field '{derivation.name}' already exists"
            )
        missing = [name for name in derivation.inputs if name not in schema]
        if missing:
            msg = f"Derivation '{derivation.name}' needs missing fields: {missing}"
            raise KeyError(msg)

        values = [derivation.apply(record) for record in records]
        for record, value in zip(records, values, strict=True):
            record[derivation.name] = value

        frame[derivation.name] = derivation.dtype.to_series(values, index=frame.index)
        schema = schema.extend(derivation.name, derivation.dtype)

        log.debug(
            "Derived field",
            field=derivation.name,
            nulls=sum(v is None for v in values),
        )

    log.info("Derived fields", fields=[d.name for d in derivations], rows=len(frame))
    return Dataset(schema, frame, dataset.sources)
