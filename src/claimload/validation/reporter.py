"""
Console reporter for validation results.

Formats validation results using Rich for clear, colored output.
"""

from rich.console import Console
from rich.table import Table

from claimload.validation.core import ValidationResult


class ConsoleReporter:
    """Formats and displays validation results to the console."""

    def __init__(self, console: Console) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_results(self, results: list[ValidationResult]) -> None:
        """
        Print validation results as a formatted table.

        Args:
            results: List of validation results to display.
        """
        table = Table(title="File Validation Results", show_header=True)
        table.add_column("File", style="cyan", no_wrap=True)
        table.add_column("Schema", style="blue")
        table.add_column("Status", justify="center")
        table.add_column("Rows", justify="right")
        table.add_column("Error", style="dim")

        for result in results:
            status = "[green]Pass[/green]" if result.valid else "[red]Fail[/red]"
            row_count = str(result.row_count) if result.row_count is not None else "-"
            table.add_row(
                result.file_name,
                result.schema_name or "inline",
                status,
                row_count,
                result.error_type or "",
            )

        self.console.print(table)
        self._print_summary(results)
        self._print_detailed_errors(results)

    def _print_summary(self, results: list[ValidationResult]) -> None:
        """Print pass/fail counts."""
        passed = sum(1 for r in results if r.valid)
        failed = len(results) - passed

        self.console.print()
        self.console.print("[bold]Summary:[/bold]")
        self.console.print(f"  Total files: {len(results)}")
        self.console.print(f"  [green]Passed: {passed}[/green]")
        self.console.print(f"  [red]Failed: {failed}[/red]")

    def _print_detailed_errors(self, results: list[ValidationResult]) -> None:
        """Print the full message of each failed file."""
        failed = [r for r in results if not r.valid]
        if not failed:
            return

        self.console.print()
        self.console.print("[bold red]Validation Errors:[/bold red]")

        for result in failed:
            self.console.print()
            self.console.print(f"[bold]{result.file_name}[/bold] ({result.error_type}):")
            if result.error_message:
                for line in result.error_message.split("\n"):
                    self.console.print(f"  {line}", markup=False)
