"""
Per-file validation of an input directory.

Parses every discovered file against the configured schema and records the
outcome per file. This is a reporting mode: it produces no dataset.
"""

from dataclasses import dataclass
from pathlib import Path

from pandera.errors import SchemaError

from claimload.config.settings import LoaderConfig
from claimload.errors import LoaderError
from claimload.ingestion.discovery import discover_files
from claimload.ingestion.parser import parse_file
from claimload.schemas.registry import SchemaRegistry
from claimload.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of validating a single file."""

    file_path: Path
    schema_name: str | None
    valid: bool
    row_count: int | None
    error_type: str | None
    error_message: str | None

    @property
    def file_name(self) -> str:
        """File name without directory."""
        return self.file_path.name


class ValidationRunner:
    """
    Runs validation for all discovered files.

    Unlike the load pipeline, a failing file does not stop the run; each
    failure is recorded and reported.
    """

    def __init__(self, config: LoaderConfig) -> None:
        """
        Initialize validation runner.

        Args:
            config: Loader configuration with discovery and schema settings.
        """
        self.config = config
        self.schema = config.table_schema.resolve()
        info = SchemaRegistry.find(self.schema)
        self.contract = info.contract if info is not None else None

    def run(self) -> list[ValidationResult]:
        """
        Validate every discovered file.

        Returns:
            One result per file, in discovery order.

        Raises:
            DirectoryNotFound: If the input directory does not exist.
        """
        files = discover_files(
            self.config.discovery.directory, self.config.discovery.suffix
        )
        return [self._validate_file(path) for path in files]

    def _validate_file(self, path: Path) -> ValidationResult:
        """Parse one file and check its contract."""
        try:
            dataset = parse_file(path, self.schema, self.config.parse)
            if self.contract is not None and self.config.validate_contract:
                self.contract.validate(dataset.frame)
        except (LoaderError, SchemaError) as e:
            log.error(
                "Validation failed",
                path=str(path),
                error_type=type(e).__name__,
                error=str(e),
            )
            return ValidationResult(
                file_path=path,
                schema_name=self.config.schema_name,
                valid=False,
                row_count=None,
                error_type=type(e).__name__,
                error_message=self._format_error(e),
            )

        log.info("Validation passed", path=str(path), rows=len(dataset))
        return ValidationResult(
            file_path=path,
            schema_name=self.config.schema_name,
            valid=True,
            row_count=len(dataset),
            error_type=None,
            error_message=None,
        )

    def _format_error(self, error: Exception) -> str:
        """
        Format an error for display.

        Pandera errors are cut to the first five failure cases.
        """
        if isinstance(error, SchemaError) and error.failure_cases is not None:
            failures = error.failure_cases
            if hasattr(failures, "head"):
                n_failures = len(failures)
                shown = failures.head(5).to_string(index=False)
                if n_failures > 5:
                    return f"{n_failures} contract violations (showing first 5):\n{shown}"
                return f"{n_failures} contract violation(s):\n{shown}"
        return str(error)
