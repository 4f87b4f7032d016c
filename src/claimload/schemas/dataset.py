"""
Dataset value type.

A Dataset couples a TableSchema with a DataFrame whose columns are exactly
the schema's columns, in schema order, and remembers the files it came from.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd

from claimload.errors import SchemaMismatchError
from claimload.schemas.table import ColumnType, TableSchema


def _to_python(value: Any, column_type: ColumnType) -> Any:
    """Convert one pandas cell to a plain Python value (None for nulls)."""
    if value is None or pd.isna(value):
        return None
    if column_type is ColumnType.DATE:
        return value.date() if isinstance(value, datetime) else value
    if column_type is ColumnType.INTEGER:
        return int(value)
    if column_type is ColumnType.FLOAT:
        return float(value)
    return str(value)


@dataclass(frozen=True)
class Dataset:
    """
    Ordered sequence of records sharing one schema.

    Attributes:
        schema: Column declaration all records conform to.
        frame: Typed DataFrame, one row per record.
        sources: Files the records were read from, in load order.
    """

    schema: TableSchema
    frame: pd.DataFrame
    sources: tuple[Path, ...] = ()

    def __post_init__(self) -> None:
        if list(self.frame.columns) != self.schema.names:
            source = self.sources[0] if self.sources else None
            detail = (
                f"frame columns {list(self.frame.columns)} do not match "
                f"schema columns {self.schema.names}"
            )
            raise SchemaMismatchError(source, detail)

    @classmethod
    def empty(cls, schema: TableSchema) -> "Dataset":
        """Dataset with the given schema and no records."""
        frame = pd.DataFrame(
            {name: tag.to_series([]) for name, tag in schema.columns}
        )
        return cls(schema, frame)

    def __len__(self) -> int:
        return len(self.frame)

    def records(self) -> Iterator[dict[str, Any]]:
        """
        Iterate over records as plain dictionaries.

        Nulls are None, dates are datetime.date, integers are int.
        """
        columns = [
            [_to_python(v, tag) for v in self.frame[name].tolist()]
            for name, tag in self.schema.columns
        ]
        names = self.schema.names
        for values in zip(*columns, strict=True):
            yield dict(zip(names, values, strict=True))
