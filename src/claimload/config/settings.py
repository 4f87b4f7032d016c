"""
Typed configuration models using Pydantic.

All loader settings are passed explicitly through a LoaderConfig.
There is no process-wide mutable state.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from claimload.schemas.registry import SchemaRegistry
from claimload.schemas.table import ColumnType, TableSchema


class UnknownColumnsPolicy(str, Enum):
    """What to do with file columns the schema does not declare."""

    ERROR = "error"
    IGNORE = "ignore"


class DiscoveryConfig(BaseModel):
    """Where to look for input files."""

    model_config = ConfigDict(frozen=True)

    directory: Path = Field(description="Directory holding the input files")
    suffix: str = Field(default=".csv", description="Filename suffix to match")

    @field_validator("suffix")
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        """Ensure the suffix is not empty."""
        if not v.strip():
            msg = "suffix must not be empty"
            raise ValueError(msg)
        return v.strip()


class ParseConfig(BaseModel):
    """How individual files are read."""

    model_config = ConfigDict(frozen=True)

    delimiter: str = Field(default=",", min_length=1, max_length=1)
    encoding: str = Field(default="utf-8")
    sheet_name: str | int = Field(
        default=0, description="Workbook sheet name or 0-based index"
    )
    unknown_columns: UnknownColumnsPolicy = Field(
        default=UnknownColumnsPolicy.ERROR,
        description="Policy for columns not declared in the schema",
    )


class SchemaConfig(BaseModel):
    """
    Schema selection.

    Either a registered schema name or an inline column mapping.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, description="Registered schema name")
    columns: dict[str, ColumnType] | None = Field(
        default=None, description="Inline ordered column -> type mapping"
    )
    date_format: str | None = Field(
        default=None, description="Date format override (strptime pattern)"
    )

    @model_validator(mode="after")
    def validate_source(self) -> "SchemaConfig":
        """Ensure exactly one of name / columns is given."""
        if (self.name is None) == (self.columns is None):
            msg = "Schema config needs exactly one of 'name' or 'columns'"
            raise ValueError(msg)
        if self.columns is not None and not self.columns:
            msg = "Schema config 'columns' must not be empty"
            raise ValueError(msg)
        return self

    def resolve(self) -> TableSchema:
        """Build the TableSchema this config describes."""
        if self.name is not None:
            table = SchemaRegistry.get(self.name)
            if self.date_format is None:
                return table
            return TableSchema(table.columns, date_format=self.date_format)
        columns = self.columns or {}
        if self.date_format is None:
            return TableSchema.from_mapping(columns)
        return TableSchema.from_mapping(columns, date_format=self.date_format)


class OutputConfig(BaseModel):
    """Optional CSV output."""

    model_config = ConfigDict(frozen=True)

    path: Path | None = Field(default=None, description="CSV output path")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure a known log level."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unknown log level: {v!r}"
            raise ValueError(msg)
        return level


class LoaderConfig(BaseModel):
    """Complete loader configuration."""

    model_config = ConfigDict(frozen=True)

    discovery: DiscoveryConfig
    parse: ParseConfig = Field(default_factory=ParseConfig)
    table_schema: SchemaConfig
    derive: list[str] = Field(
        default_factory=list, description="Names of registered derivations"
    )
    max_workers: int = Field(
        default=1, ge=1, le=32, description="Parallel file parses (1 = sequential)"
    )
    validate_contract: bool = Field(
        default=True, description="Check the loaded dataset with pandera"
    )
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def schema_name(self) -> str | None:
        """Registered schema name, if the schema was selected by name."""
        return self.table_schema.name
