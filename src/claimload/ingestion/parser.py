"""
Schema-driven file parsing.

Each parser reads one file without any type inference and coerces every
column according to the TableSchema. Parse failures are raised with the
file, row and column of the offending cell.
"""

import csv
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import Any, ClassVar

import pandas as pd

from claimload.config.settings import ParseConfig, UnknownColumnsPolicy
from claimload.errors import SchemaMismatchError, UnsupportedFileFormat
from claimload.ingestion.coercion import coerce_sheet_cell, coerce_text_cell
from claimload.schemas.dataset import Dataset
from claimload.schemas.table import ColumnType, TableSchema
from claimload.utils.logging import get_logger, log_context

log = get_logger(__name__)


def _is_blank(record: list[str]) -> bool:
    return not record or (len(record) == 1 and not record[0].strip())


def record_lines(path: Path, config: ParseConfig) -> list[int]:
    """
    Line number of every data record in a delimited text file.

    Blank lines are skipped, matching the table reader. A record whose
    quoted field spans several lines is numbered by its first line.

    Raises:
        SchemaMismatchError: If a record has a different field count than
            the header.
    """
    lines: list[int] = []
    with Path(path).open(encoding=config.encoding, newline="") as f:
        reader = csv.reader(f, delimiter=config.delimiter)
        header = next((r for r in reader if not _is_blank(r)), None)
        if header is None:
            return lines
        start = reader.line_num + 1
        for record in reader:
            if not _is_blank(record):
                if len(record) != len(header):
                    raise SchemaMismatchError(
                        path,
                        f"row {start} has {len(record)} fields, "
                        f"the header has {len(header)}",
                    )
                lines.append(start)
            start = reader.line_num + 1
    return lines


def read_text_table(path: Path, config: ParseConfig) -> pd.DataFrame:
    """
    Read a delimited text file with every cell kept as text.

    Empty cells stay empty strings; "NA", "null" and friends are not
    turned into missing values. The index holds each record's line
    number in the file.

    Raises:
        UnsupportedFileFormat: If the file cannot be decoded or tokenized.
        SchemaMismatchError: If the file has no header row, or a record
            does not have one field per header column.
    """
    try:
        lines = record_lines(path, config)
        frame = pd.read_csv(
            path,
            sep=config.delimiter,
            encoding=config.encoding,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            index_col=False,
        )
    except UnicodeDecodeError as e:
        raise UnsupportedFileFormat(path, f"not valid {config.encoding} text") from e
    except pd.errors.EmptyDataError as e:
        raise SchemaMismatchError(path, "file has no header row") from e
    except (pd.errors.ParserError, csv.Error) as e:
        raise UnsupportedFileFormat(path, f"malformed delimited text: {e}") from e

    if len(lines) != len(frame):
        raise UnsupportedFileFormat(
            path, f"found {len(frame)} records but {len(lines)} record lines"
        )
    frame.index = pd.Index(lines, name="line")
    return frame


def read_workbook_table(path: Path, config: ParseConfig) -> pd.DataFrame:
    """
    Read one workbook sheet keeping each cell's native type.

    Empty cells come back as empty strings. The index holds each record's
    sheet row number, counting the header as row 1.

    Raises:
        UnsupportedFileFormat: If the sheet does not exist.
    """
    try:
        frame = pd.read_excel(
            path,
            sheet_name=config.sheet_name,
            dtype=object,
            na_filter=False,
        )
    except (ValueError, IndexError) as e:
        raise UnsupportedFileFormat(
            path, f"cannot read sheet {config.sheet_name!r}: {e}"
        ) from e
    frame.index = pd.RangeIndex(2, 2 + len(frame), name="line")
    return frame


class FileParser(ABC):
    """
    Abstract base class for schema-driven file parsers.

    Subclasses read the raw table and coerce single cells; header checks,
    column ordering and Dataset construction are shared.
    """

    suffixes: ClassVar[tuple[str, ...]] = ()

    def __init__(self, schema: TableSchema, config: ParseConfig | None = None) -> None:
        """
        Initialize parser.

        Args:
            schema: Column declaration to parse against.
            config: Read options; defaults apply when omitted.
        """
        self.schema = schema
        self.config = config or ParseConfig()

    @abstractmethod
    def _read_raw(self, path: Path) -> pd.DataFrame:
        """Read the file without type inference. Implemented by subclasses."""
        ...

    @abstractmethod
    def _coerce_cell(
        self, path: Path, row: int, column: str, value: Any, column_type: ColumnType
    ) -> Any:
        """Convert one raw cell. Implemented by subclasses."""
        ...

    def parse(self, path: Path) -> Dataset:
        """
        Parse one file into a Dataset.

        Args:
            path: File to parse.

        Returns:
            Dataset with the parser's schema and this file as its only source.

        Raises:
            FileNotFoundError: If the file does not exist.
            SchemaMismatchError: If the header does not fit the schema.
            TypeCoercionError: If a cell cannot be coerced.
            UnsupportedFileFormat: If the file or a cell cannot be mapped.
        """
        path = Path(path)
        if not path.exists():
            msg = f"Input file not found: {path}"
            raise FileNotFoundError(msg)

        with log_context(path=str(path)):
            log.debug("Parsing file", parser=self.__class__.__name__)

            raw = self._read_raw(path)
            raw.columns = [str(c).strip() for c in raw.columns]
            self._check_header(path, list(raw.columns))

            columns: dict[str, pd.Series] = {}
            for name, column_type in self.schema.columns:
                values = [
                    self._coerce_cell(path, line, name, value, column_type)
                    for line, value in zip(
                        raw.index.tolist(), raw[name].tolist(), strict=True
                    )
                ]
                columns[name] = column_type.to_series(values)

            if columns:
                frame = pd.DataFrame(columns)
            else:
                frame = pd.DataFrame(index=range(len(raw)))
            log.info("Parsed file", rows=len(frame))

        return Dataset(self.schema, frame, (path,))

    def _check_header(self, path: Path, header: list[str]) -> None:
        """
        Compare a file header with the schema.

        Raises:
            SchemaMismatchError: On missing columns, or on unknown columns
                when the policy is 'error'.
        """
        missing = [name for name in self.schema.names if name not in header]
        if missing:
            raise SchemaMismatchError(path, f"missing columns: {missing}")

        unknown = [name for name in header if name not in self.schema]
        if not unknown:
            return
        if self.config.unknown_columns is UnknownColumnsPolicy.ERROR:
            raise SchemaMismatchError(path, f"unknown columns: {unknown}")
        log.warning("Ignoring unknown columns", columns=unknown)


class TextFileParser(FileParser):
    """Parser for delimited text files (CSV)."""

    suffixes: ClassVar[tuple[str, ...]] = (".csv", ".txt")

    def _read_raw(self, path: Path) -> pd.DataFrame:
        return read_text_table(path, self.config)

    def _coerce_cell(
        self, path: Path, row: int, column: str, value: Any, column_type: ColumnType
    ) -> Any:
        return coerce_text_cell(
            value,
            column_type,
            self.schema.date_format,
            path=path,
            row=row,
            column=column,
        )


class WorkbookParser(FileParser):
    """Parser for spreadsheet workbooks (xlsx, read through openpyxl)."""

    suffixes: ClassVar[tuple[str, ...]] = (".xlsx", ".xlsm")

    def _read_raw(self, path: Path) -> pd.DataFrame:
        return read_workbook_table(path, self.config)

    def _coerce_cell(
        self, path: Path, row: int, column: str, value: Any, column_type: ColumnType
    ) -> Any:
        return coerce_sheet_cell(
            value,
            column_type,
            self.schema.date_format,
            path=path,
            row=row,
            column=column,
        )


PARSERS: tuple[type[FileParser], ...] = (TextFileParser, WorkbookParser)


def parser_class_for(path: Path) -> type[FileParser]:
    """
    Pick the parser class for a file by its suffix.

    Raises:
        UnsupportedFileFormat: If no parser handles the suffix.
    """
    suffix = Path(path).suffix.lower()
    for parser_cls in PARSERS:
        if suffix in parser_cls.suffixes:
            return parser_cls
    supported = sorted(s for p in PARSERS for s in p.suffixes)
    raise UnsupportedFileFormat(
        Path(path), f"unsupported file suffix {suffix!r} (supported: {supported})"
    )


def raw_reader_for(path: Path) -> Callable[[Path, ParseConfig], pd.DataFrame]:
    """Raw (uncoerced) table reader for a file, by its suffix."""
    if parser_class_for(path) is WorkbookParser:
        return read_workbook_table
    return read_text_table


def parse_file(
    path: Path,
    schema: TableSchema,
    config: ParseConfig | None = None,
) -> Dataset:
    """
    Convenience function to parse one file against a schema.

    Args:
        path: CSV or workbook file.
        schema: Column declaration.
        config: Read options.

    Returns:
        Dataset with one source.
    """
    parser = parser_class_for(path)(schema, config)
    return parser.parse(path)
