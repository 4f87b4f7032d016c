"""
Data ingestion layer: discovery, schema-driven parsing and inference.

All file reading happens through this module so that every value is
coerced against an explicit schema at the system boundary.
"""

from claimload.ingestion.discovery import discover_files
from claimload.ingestion.inference import InferenceReport, infer_schema
from claimload.ingestion.parser import (
    FileParser,
    TextFileParser,
    WorkbookParser,
    parse_file,
)

__all__ = [
    "FileParser",
    "InferenceReport",
    "TextFileParser",
    "WorkbookParser",
    "discover_files",
    "infer_schema",
    "parse_file",
]
