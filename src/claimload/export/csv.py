"""
CSV export of a Dataset.

Writes the schema's columns in order with a header row. Values are
rendered as the text the parser reads back: dates in the schema's date
format, nulls as empty cells.
"""

from pathlib import Path

import pandas as pd

from claimload.schemas.dataset import Dataset
from claimload.utils.logging import get_logger

log = get_logger(__name__)


def to_text_frame(dataset: Dataset) -> pd.DataFrame:
    """Render every cell of a dataset as text."""
    schema = dataset.schema
    rows = [
        [schema.format_value(tag, record[name]) for name, tag in schema.columns]
        for record in dataset.records()
    ]
    return pd.DataFrame(rows, columns=schema.names, dtype=object)


def write_csv(dataset: Dataset, path: Path, delimiter: str = ",") -> Path:
    """
    Write a dataset to a CSV file.

    Args:
        dataset: Dataset to write.
        path: Output file; parent directories are created.
        delimiter: Field separator.

    Returns:
        The path written to.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    to_text_frame(dataset).to_csv(path, sep=delimiter, index=False, encoding="utf-8")
    log.info("Wrote dataset", path=str(path), rows=len(dataset))
    return path
