"""
Schema inference as an explicit, reported step.

Scans a file and proposes a TableSchema. The proposal is returned to the
caller for review; the loader never applies an inferred schema on its own.
"""

import numbers
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any

from claimload.config.settings import ParseConfig
from claimload.ingestion.coercion import parse_text
from claimload.ingestion.parser import raw_reader_for
from claimload.schemas.table import ISO_DATE_FORMAT, ColumnType, TableSchema
from claimload.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class ColumnInference:
    """Proposed type for one column, with the reason and a few samples."""

    name: str
    column_type: ColumnType
    reason: str
    samples: tuple[str, ...]
    null_count: int


@dataclass(frozen=True)
class InferenceReport:
    """Result of scanning one file."""

    path: Path
    row_count: int
    columns: tuple[ColumnInference, ...]
    date_format: str = ISO_DATE_FORMAT

    @property
    def schema(self) -> TableSchema:
        """The proposed schema."""
        return TableSchema(
            tuple((c.name, c.column_type) for c in self.columns),
            date_format=self.date_format,
        )


def _kind(value: Any, date_format: str) -> str | None:
    """
    Classify one non-empty cell.

    Returns one of "integer", "leading_zero", "float", "date", "text",
    or None for an empty cell.
    """
    if isinstance(value, str):
        text = value.strip()
        if text == "":
            return None
        try:
            parse_text(text, ColumnType.INTEGER, date_format)
        except ValueError:
            pass
        else:
            digits = text.lstrip("+-")
            if len(digits) > 1 and digits.startswith("0"):
                return "leading_zero"
            return "integer"
        for kind, column_type in (("float", ColumnType.FLOAT), ("date", ColumnType.DATE)):
            try:
                parse_text(text, column_type, date_format)
            except ValueError:
                continue
            return kind
        return "text"
    if isinstance(value, bool):
        return "text"
    if isinstance(value, numbers.Integral):
        return "integer"
    if isinstance(value, numbers.Real):
        return "integer" if float(value).is_integer() else "float"
    if isinstance(value, date):
        return "date"
    return "text"


def _decide(kinds: set[str]) -> tuple[ColumnType, str]:
    """Pick a column type from the set of cell kinds seen."""
    if not kinds:
        return ColumnType.STRING, "all cells empty"
    if "leading_zero" in kinds:
        return ColumnType.STRING, "digits with leading zeros (identifier)"
    if kinds == {"integer"}:
        return ColumnType.INTEGER, "all values are integers"
    if kinds <= {"integer", "float"}:
        return ColumnType.FLOAT, "all values are numbers"
    if kinds == {"date"}:
        return ColumnType.DATE, "all values are dates"
    return ColumnType.STRING, "free text"


def infer_schema(
    path: Path,
    config: ParseConfig | None = None,
    *,
    date_format: str = ISO_DATE_FORMAT,
    sample_size: int = 3,
) -> InferenceReport:
    """
    Scan a file and propose a schema.

    Identifier-like columns (digit strings with leading zeros) are proposed
    as strings so that the proposal never loses information.

    Args:
        path: CSV or workbook file.
        config: Read options.
        date_format: Date pattern to test date candidates against.
        sample_size: Number of distinct sample values to report per column.

    Returns:
        InferenceReport with the proposed schema.
    """
    path = Path(path)
    config = config or ParseConfig()
    raw = raw_reader_for(path)(path, config)

    columns: list[ColumnInference] = []
    for name in raw.columns:
        values = raw[name].tolist()
        kinds: set[str] = set()
        samples: list[str] = []
        null_count = 0
        for value in values:
            kind = _kind(value, date_format)
            if kind is None:
                null_count += 1
                continue
            kinds.add(kind)
            text = str(value)
            if len(samples) < sample_size and text not in samples:
                samples.append(text)
        column_type, reason = _decide(kinds)
        columns.append(
            ColumnInference(
                name=str(name).strip(),
                column_type=column_type,
                reason=reason,
                samples=tuple(samples),
                null_count=null_count,
            )
        )

    report = InferenceReport(
        path=path,
        row_count=len(raw),
        columns=tuple(columns),
        date_format=date_format,
    )
    log.info(
        "Inferred schema",
        path=str(path),
        rows=report.row_count,
        columns={c.name: c.column_type.value for c in columns},
    )
    return report
