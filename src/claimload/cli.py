"""Command-line interface for the claimload batch loader."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from claimload.config.settings import LoaderConfig

app = typer.Typer(
    name="claimload",
    help="Batch loader for claim transaction CSV and Excel files.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file.",
        exists=True,
        dir_okay=False,
    ),
]
DirectoryOption = Annotated[
    Path | None,
    typer.Option(
        "--directory",
        "-d",
        help="Directory holding the input files (overrides config).",
    ),
]
SuffixOption = Annotated[
    str | None,
    typer.Option(
        "--suffix",
        "-s",
        help="Filename suffix to match, e.g. .csv or .xlsx (overrides config).",
    ),
]
SchemaOption = Annotated[
    str | None,
    typer.Option(
        "--schema",
        help="Registered schema name (overrides config).",
    ),
]
LogLevelOption = Annotated[
    str | None,
    typer.Option(
        "--log-level",
        help="Log level (DEBUG, INFO, WARNING, ERROR).",
    ),
]


def _load_loader_config(
    config: Path | None,
    directory: Path | None,
    suffix: str | None,
    schema: str | None,
    log_level: str | None,
    extra: dict[str, Any] | None = None,
) -> "LoaderConfig":
    """Merge CLI options over the YAML config and set up logging."""
    from claimload.config.loader import load_config
    from claimload.utils.logging import configure_logging

    overrides: dict[str, Any] = {
        "discovery": {
            "directory": str(directory) if directory is not None else None,
            "suffix": suffix,
        },
        "logging": {"level": log_level},
    }
    if schema is not None:
        overrides["schema"] = {"name": schema}
    if extra:
        overrides.update(extra)

    loader_config = load_config(config, overrides=overrides)
    configure_logging(
        level=loader_config.logging.level,
        json_output=loader_config.logging.json_output,
    )
    return loader_config


@app.command()
def load(
    config: ConfigOption = None,
    directory: DirectoryOption = None,
    suffix: SuffixOption = None,
    schema: SchemaOption = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the combined dataset to this CSV file.",
        ),
    ] = None,
    derive: Annotated[
        list[str] | None,
        typer.Option(
            "--derive",
            help="Derived field to compute (repeatable, overrides config).",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-w",
            help="Number of files parsed in parallel.",
        ),
    ] = None,
    log_level: LogLevelOption = None,
) -> None:
    """Load, stack and derive all matching files in a directory."""
    from claimload.errors import LoaderError
    from claimload.etl import run_load

    extra: dict[str, Any] = {"max_workers": workers}
    if derive:
        extra["derive"] = list(derive)

    try:
        loader_config = _load_loader_config(
            config, directory, suffix, schema, log_level, extra
        )
        console.print(
            f"[blue]Loading {loader_config.discovery.suffix} files from "
            f"{loader_config.discovery.directory}[/blue]"
        )
        result = run_load(loader_config, output_path=output)
    except LoaderError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    except Exception as e:
        console.print(f"[red]Load failed: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    table = Table(title="Load Results")
    table.add_column("File", style="cyan")
    table.add_column("Rows", justify="right", style="green")
    for path, rows in result.rows_per_file.items():
        table.add_row(path.name, str(rows))
    table.add_row("[bold]Total[/bold]", f"[bold]{len(result.dataset)}[/bold]")
    console.print(table)

    console.print("\n[blue]Columns:[/blue]")
    frame = result.dataset.frame
    for name, tag in result.dataset.schema.columns:
        non_null = int(frame[name].notna().sum())
        console.print(f"  {name} ({tag.value}): {non_null}/{len(frame)} non-null")

    if result.output_path:
        console.print(f"\n[green]Saved to: {result.output_path}[/green]")


@app.command()
def infer(
    path: Annotated[
        Path,
        typer.Argument(
            help="CSV or Excel file to scan.",
            exists=True,
            dir_okay=False,
        ),
    ],
    date_format: Annotated[
        str,
        typer.Option(
            "--date-format",
            help="Date pattern to test date candidates against.",
        ),
    ] = "%Y-%m-%d",
    as_yaml: Annotated[
        bool,
        typer.Option(
            "--yaml",
            help="Print the proposed schema as a YAML config block.",
        ),
    ] = False,
    log_level: LogLevelOption = None,
) -> None:
    """Propose a schema for a file. The proposal is printed, never applied."""
    import yaml

    from claimload.errors import LoaderError
    from claimload.ingestion.inference import infer_schema
    from claimload.utils.logging import configure_logging

    configure_logging(level=log_level or "INFO")

    try:
        report = infer_schema(path, date_format=date_format)
    except LoaderError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if as_yaml:
        console.print(
            yaml.safe_dump({"schema": report.schema.to_dict()}, sort_keys=False),
            markup=False,
        )
        return

    table = Table(title=f"Inferred schema: {report.path.name} ({report.row_count} rows)")
    table.add_column("Column", style="cyan", no_wrap=True)
    table.add_column("Type", style="green")
    table.add_column("Nulls", justify="right")
    table.add_column("Reason", style="dim")
    table.add_column("Samples")
    for column in report.columns:
        table.add_row(
            column.name,
            column.column_type.value,
            str(column.null_count),
            column.reason,
            ", ".join(column.samples),
        )
    console.print(table)
    console.print(
        "[yellow]Review the proposal before adding it to a config; "
        "identifier columns must stay strings.[/yellow]"
    )


@app.command()
def validate(
    config: ConfigOption = None,
    directory: DirectoryOption = None,
    suffix: SuffixOption = None,
    schema: SchemaOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Validate every matching file against the schema and report per file."""
    from claimload.errors import LoaderError
    from claimload.validation import ConsoleReporter, ValidationRunner

    console.print("[blue]Running file validation...[/blue]")

    try:
        loader_config = _load_loader_config(
            config, directory, suffix, schema, log_level
        )
        results = ValidationRunner(loader_config).run()
    except (LoaderError, ValueError, KeyError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    reporter = ConsoleReporter(console)
    reporter.print_results(results)

    if any(not r.valid for r in results):
        raise typer.Exit(code=1)


@app.command()
def version() -> None:
    """Show version information."""
    from claimload import __version__

    console.print(f"claimload version {__version__}")


if __name__ == "__main__":
    app()
