"""Row-wise concatenation of datasets that share one schema."""

from collections.abc import Sequence
from itertools import chain

import pandas as pd

from claimload.errors import SchemaMismatchError
from claimload.schemas.dataset import Dataset
from claimload.schemas.table import TableSchema
from claimload.utils.logging import get_logger

log = get_logger(__name__)


def concatenate(
    datasets: Sequence[Dataset],
    schema: TableSchema | None = None,
) -> Dataset:
    """
    Stack datasets in the given order.

    All schemas are checked before anything is combined, so a mismatch
    never yields partial output.

    Args:
        datasets: Datasets in load order.
        schema: Expected schema. Defaults to the first dataset's schema and
            is required when datasets is empty.

    Returns:
        One Dataset with a fresh 0..n-1 index and the combined sources.

    Raises:
        SchemaMismatchError: If any dataset's schema differs.
        ValueError: If datasets is empty and no schema is given.
    """
    if not datasets:
        if schema is None:
            msg = "Cannot concatenate zero datasets without a schema"
            raise ValueError(msg)
        return Dataset.empty(schema)

    expected = schema if schema is not None else datasets[0].schema
    for dataset in datasets:
        difference = expected.diff(dataset.schema)
        if difference is not None:
            source = dataset.sources[0] if dataset.sources else None
            raise SchemaMismatchError(source, difference)

    frame = pd.concat([d.frame for d in datasets], ignore_index=True)
    # pd.concat may widen dtypes when a part is empty
    frame = frame.astype(expected.dtypes())
    sources = tuple(chain.from_iterable(d.sources for d in datasets))

    log.info("Concatenated datasets", parts=len(datasets), rows=len(frame))
    return Dataset(expected, frame, sources)
