"""
Cell-level type coercion.

Text cells are converted strictly according to their column's type tag.
Nothing is guessed: a cell that does not match raises with its location.
"""

import math
import numbers
import re
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd

from claimload.errors import DateParseError, TypeCoercionError, UnsupportedFileFormat
from claimload.schemas.table import ColumnType

INTEGER_PATTERN = re.compile(r"[+-]?\d+")
FLOAT_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

# Integer columns are stored as 64-bit
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def parse_text(raw: str, column_type: ColumnType, date_format: str) -> Any:
    """
    Convert one text cell to a Python value.

    An empty cell is null for every type. String cells are returned
    verbatim; other types ignore surrounding whitespace.

    Args:
        raw: Cell text as read from the file.
        column_type: Declared column type.
        date_format: strptime pattern for date columns.

    Returns:
        str, int, float, datetime.date, or None.

    Raises:
        ValueError: If the text is not a valid literal of the type.
    """
    if raw == "":
        return None
    if column_type is ColumnType.STRING:
        return raw

    text = raw.strip()
    if text == "":
        return None

    if column_type is ColumnType.INTEGER:
        if not INTEGER_PATTERN.fullmatch(text):
            msg = f"not an integer literal: {raw!r}"
            raise ValueError(msg)
        value = int(text)
        if not INT64_MIN <= value <= INT64_MAX:
            msg = f"integer out of range: {raw!r}"
            raise ValueError(msg)
        return value

    if column_type is ColumnType.FLOAT:
        if not FLOAT_PATTERN.fullmatch(text):
            msg = f"not a decimal literal: {raw!r}"
            raise ValueError(msg)
        value = float(text)
        if not math.isfinite(value):
            msg = f"decimal out of range: {raw!r}"
            raise ValueError(msg)
        return value

    return datetime.strptime(text, date_format).date()


def coerce_text_cell(
    raw: str,
    column_type: ColumnType,
    date_format: str,
    *,
    path: Path | None,
    row: int | None,
    column: str,
) -> Any:
    """
    Convert one text cell, raising a located error on failure.

    Raises:
        DateParseError: If a date cell does not match date_format.
        TypeCoercionError: If any other cell cannot be converted.
    """
    try:
        return parse_text(raw, column_type, date_format)
    except ValueError as e:
        if column_type is ColumnType.DATE:
            raise DateParseError(path, row, column, raw, date_format) from e
        raise TypeCoercionError(path, row, column, raw, column_type.value) from e


def coerce_sheet_cell(
    value: Any,
    column_type: ColumnType,
    date_format: str,
    *,
    path: Path,
    row: int,
    column: str,
) -> Any:
    """
    Convert one natively-typed spreadsheet cell.

    Spreadsheet cells carry their own type. Text cells go through the
    strict text path; numbers and dates are mapped directly where the
    declared type can hold them.

    Raises:
        UnsupportedFileFormat: If the cell's native type cannot represent
            the declared column type (numeric cell in a string column,
            boolean cells, time-of-day cells, ...).
        TypeCoercionError: If a text or numeric cell holds an invalid value.
    """
    if isinstance(value, str):
        return coerce_text_cell(
            value, column_type, date_format, path=path, row=row, column=column
        )
    if value is None or pd.isna(value):
        return None

    if isinstance(value, bool):
        raise UnsupportedFileFormat(
            path, "boolean cells cannot be mapped", row=row, column=column
        )

    if isinstance(value, numbers.Real):
        if column_type is ColumnType.INTEGER:
            if float(value).is_integer() and INT64_MIN <= int(value) <= INT64_MAX:
                return int(value)
            raise TypeCoercionError(path, row, column, value, column_type.value)
        if column_type is ColumnType.FLOAT:
            return float(value)
        raise UnsupportedFileFormat(
            path,
            f"numeric cell {value!r} cannot be read as {column_type.value}; "
            "store the column as text in the workbook",
            row=row,
            column=column,
        )

    if isinstance(value, date):
        if column_type is ColumnType.DATE:
            return value.date() if isinstance(value, datetime) else value
        raise UnsupportedFileFormat(
            path,
            f"date cell cannot be read as {column_type.value}",
            row=row,
            column=column,
        )

    raise UnsupportedFileFormat(
        path,
        f"cell of type {type(value).__name__} cannot be mapped",
        row=row,
        column=column,
    )
