"""Per-file validation module."""

from claimload.validation.core import ValidationResult, ValidationRunner
from claimload.validation.reporter import ConsoleReporter

__all__ = ["ValidationResult", "ValidationRunner", "ConsoleReporter"]
