"""
Error taxonomy for the loader.

Every error carries enough context (file, row, column) to locate the bad
input. None of them is recovered from inside the package.
"""

from pathlib import Path


class LoaderError(Exception):
    """Base class for all loader errors."""


class DirectoryNotFound(LoaderError, FileNotFoundError):
    """Raised when the discovery directory does not exist."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        super().__init__(f"Directory not found: {self.directory}")


class TypeCoercionError(LoaderError, ValueError):
    """Raised when a single cell cannot be coerced to its column type."""

    def __init__(
        self,
        path: Path | None,
        row: int | None,
        column: str,
        value: object,
        expected: str,
    ) -> None:
        self.path = path
        self.row = row
        self.column = column
        self.value = value
        self.expected = expected
        super().__init__(self._format())

    def _format(self) -> str:
        location = str(self.path) if self.path is not None else "<memory>"
        if self.row is not None:
            location = f"{location}, row {self.row}"
        return (
            f"{location}: cannot coerce {self.value!r} in column "
            f"'{self.column}' to {self.expected}"
        )


class DateParseError(TypeCoercionError):
    """Raised when a date cell does not match the expected format."""

    def __init__(
        self,
        path: Path | None,
        row: int | None,
        column: str,
        value: object,
        date_format: str,
    ) -> None:
        self.date_format = date_format
        super().__init__(path, row, column, value, f"date ({date_format})")


class SchemaMismatchError(LoaderError):
    """Raised when a source does not conform to the expected schema."""

    def __init__(self, source: Path | str | None, detail: str) -> None:
        self.source = source
        self.detail = detail
        prefix = f"{source}: " if source is not None else ""
        super().__init__(f"{prefix}schema mismatch: {detail}")


class UnsupportedFileFormat(LoaderError):
    """
    Raised when a file, or a cell within it, cannot be mapped to the schema.

    Covers unknown file suffixes as well as spreadsheet cells whose native
    type cannot represent the declared column type (e.g. a numeric cell in
    an identifier column, where leading zeros are already lost).
    """

    def __init__(
        self,
        path: Path,
        detail: str,
        row: int | None = None,
        column: str | None = None,
    ) -> None:
        self.path = Path(path)
        self.detail = detail
        self.row = row
        self.column = column
        location = str(self.path)
        if row is not None:
            location = f"{location}, row {row}"
        if column is not None:
            location = f"{location}, column '{column}'"
        super().__init__(f"{location}: {detail}")
