"""
Declarative table schemas.

A TableSchema is an ordered list of (column name, type tag) pairs plus the
date format used for date columns. It drives parsing, concatenation checks,
derivation and re-serialisation.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

import pandas as pd
import pandera.pandas as pa

ISO_DATE_FORMAT = "%Y-%m-%d"


class ColumnType(str, Enum):
    """Primitive type tag of a column."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    DATE = "date"

    @property
    def pandas_dtype(self) -> str:
        """In-memory pandas dtype for columns of this type."""
        return _PANDAS_DTYPES[self]

    def to_series(
        self, values: Sequence[Any], index: pd.Index | None = None
    ) -> pd.Series:
        """
        Build a typed Series from already-coerced Python values.

        None marks a null cell.

        Args:
            values: Coerced values (str, int, float or datetime.date).
            index: Optional index for the resulting Series.

        Returns:
            Series with this type's pandas dtype.
        """
        return pd.Series(list(values), dtype=self.pandas_dtype, index=index)


_PANDAS_DTYPES: dict[ColumnType, str] = {
    ColumnType.STRING: "string",
    ColumnType.INTEGER: "Int64",
    ColumnType.FLOAT: "Float64",
    # datetime.date objects, covering years 1 to 9999
    ColumnType.DATE: "object",
}


@dataclass(frozen=True)
class TableSchema:
    """
    Ordered column-name-to-type declaration.

    Attributes:
        columns: Ordered (name, type) pairs.
        date_format: strftime/strptime pattern for all date columns.
    """

    columns: tuple[tuple[str, ColumnType], ...]
    date_format: str = ISO_DATE_FORMAT
    _index: dict[str, ColumnType] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        normalized = tuple((str(name), ColumnType(tag)) for name, tag in self.columns)
        names = [name for name, _ in normalized]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            msg = f"Duplicate column names in schema: {', '.join(duplicates)}"
            raise ValueError(msg)
        object.__setattr__(self, "columns", normalized)
        object.__setattr__(self, "_index", dict(normalized))

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, ColumnType | str],
        date_format: str = ISO_DATE_FORMAT,
    ) -> "TableSchema":
        """Build a schema from an ordered mapping of name to type tag."""
        return cls(tuple(mapping.items()), date_format=date_format)

    @property
    def names(self) -> list[str]:
        """Column names in schema order."""
        return [name for name, _ in self.columns]

    def __len__(self) -> int:
        return len(self.columns)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def type_of(self, name: str) -> ColumnType:
        """
        Get the type tag of a column.

        Raises:
            KeyError: If the column is not part of the schema.
        """
        if name not in self._index:
            msg = f"Unknown column '{name}'. Available: {', '.join(self.names)}"
            raise KeyError(msg)
        return self._index[name]
    def extend(self, name: str, column_type: ColumnType | str) -> "TableSchema":
        """Return a new schema with one column appended."""
        return TableSchema(
            (*self.columns, (name, ColumnType(column_type))),
            date_format=self.date_format,
        )
    def diff(self, other: "TableSchema") -> str | None:
        """
        Describe the first difference between two schemas.

        Returns:
            Human-readable difference, or None if the schemas are equal.
        """
        if self.names != other.names:
            missing = [n for n in self.names if n not in other]
            extra = [n for n in other.names if n not in self]
            if missing or extra:
                return f"columns differ (missing: {missing}, unexpected: {extra})"
            return f"column order differs: expected {self.names}, got {other.names}"
        for name, tag in self.columns:
            other_tag = other.type_of(name)
            if tag is not other_tag:
                return (
                    f"column '{name}' has type {other_tag.value}, "
                    f"expected {tag.value}"
                )
        if self.date_format != other.date_format:
            return (
                f"date format {other.date_format!r} differs from "
                f"{self.date_format!r}"
            )
        return None

    def dtypes(self) -> dict[str, str]:
        """Pandas dtype per column."""
        return {name: tag.pandas_dtype for name, tag in self.columns}

    def to_dict(self) -> dict[str, Any]:
        """Plain representation, e.g. for dumping into a YAML config."""
        return {
            "columns": {name: tag.value for name, tag in self.columns},
            "date_format": self.date_format,
        }

    def to_pandera(self, name: str | None = None) -> pa.DataFrameSchema:
        """
        Structural contract for a DataFrame holding this schema's columns.

        The contract checks dtypes, column order and the absence of extra
        columns. It never coerces.
        """
        return pa.DataFrameSchema(
            {
                col: pa.Column(
                    pa.Date if tag is ColumnType.DATE else tag.pandas_dtype,
                    nullable=True,
                    coerce=False,
                )
                for col, tag in self.columns
            },
            strict=True,
            ordered=True,
            name=name,
        )

    def format_value(self, column_type: ColumnType, value: Any) -> str:
        """Render one Python value as text, the inverse of text parsing."""
        if value is None:
            return ""
        if column_type is ColumnType.DATE:
            return date.strftime(value, self.date_format)
        if column_type is ColumnType.FLOAT:
            return repr(float(value))
        return str(value)
