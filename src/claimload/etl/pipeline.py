"""
Load pipeline implementation.

Orchestrates discovery, per-file parsing, concatenation, derivation,
derived-field validation and optional export to produce one dataset.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from claimload.config.settings import LoaderConfig
from claimload.errors import LoaderError
from claimload.etl.concat import concatenate
from claimload.export.csv import write_csv
from claimload.features.definitions import Derivation, DerivationRegistry
from claimload.features.derive import derive_fields
from claimload.ingestion.discovery import discover_files
from claimload.ingestion.parser import parse_file
from claimload.schemas.dataset import Dataset
from claimload.schemas.registry import SchemaRegistry
from claimload.schemas.table import TableSchema
from claimload.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class LoadResult:
    """
    Result of a load run.

    Attributes:
        dataset: Concatenated dataset with derived fields.
        files: Parsed files in discovery order.
        rows_per_file: Record count per file, in discovery order.
        output_path: Path where the dataset was written (if any).
    """

    dataset: Dataset
    files: list[Path]
    rows_per_file: dict[Path, int] = field(default_factory=dict)
    output_path: Path | None = None


class LoadPipeline:
    """
    Batch loader for a directory of tabular files.

    The pipeline is a straight line: Discover -> Parse -> Concatenate ->
    Derive. Any error aborts the whole run.
    """

    def __init__(
        self,
        config: LoaderConfig,
        registry: DerivationRegistry | None = None,
    ) -> None:
        """
        Initialize load pipeline.

        Args:
            config: Loader configuration.
            registry: Derivation registry used to resolve config.derive.
        """
        self.config = config
        self.schema: TableSchema = config.table_schema.resolve()
        self.registry = registry or DerivationRegistry()

    def run(
        self,
        output_path: Path | None = None,
        derivations: list[Derivation] | None = None,
    ) -> LoadResult:
        """
        Execute the pipeline.

        Args:
            output_path: CSV output path, overriding config.output.path.
            derivations: Derivations to apply, overriding config.derive.

        Returns:
            LoadResult with the dataset and per-file statistics.
        """
        if derivations is None:
            derivations = self.registry.resolve(self.config.derive)

        log.info(
            "Starting load",
            directory=str(self.config.discovery.directory),
            suffix=self.config.discovery.suffix,
            columns=len(self.schema),
        )

        files = discover_files(
            self.config.discovery.directory, self.config.discovery.suffix
        )
        parts = self._parse_all(files)

        dataset = concatenate(parts, schema=self.schema)
        self._validate_contract(dataset)

        dataset = derive_fields(dataset, derivations)
        self._validate_derived(dataset)

        target = output_path or self.config.output.path
        written = write_csv(dataset, target) if target is not None else None

        log.info("Load complete", files=len(files), rows=len(dataset))
        return LoadResult(
            dataset=dataset,
            files=files,
            rows_per_file={p.sources[0]: len(p) for p in parts},
            output_path=written,
        )

    def _parse_all(self, files: list[Path]) -> list[Dataset]:
        """Parse all files, in parallel when configured."""
        if self.config.max_workers > 1 and len(files) > 1:
            return self._parse_parallel(files)
        return self._parse_sequential(files)

    def _parse_one(self, path: Path) -> Dataset:
        return parse_file(path, self.schema, self.config.parse)

    def _parse_sequential(self, files: list[Path]) -> list[Dataset]:
        """Parse files one after another."""
        return [self._parse_one(path) for path in files]

    def _parse_parallel(self, files: list[Path]) -> list[Dataset]:
        """
        Parse files concurrently.

        Results are placed by discovery position, not completion order.
        The first failure cancels pending parses and is re-raised.
        """
        results: list[Dataset | None] = [None] * len(files)

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = {
                executor.submit(self._parse_one, path): index
                for index, path in enumerate(files)
            }

            for future in as_completed(futures):
                index = futures[future]
                try:
                    results[index] = future.result()
                except Exception as e:
                    log.error("Failed to parse file", path=str(files[index]), error=str(e))
                    for pending in futures:
                        pending.cancel()
                    raise

        return [r for r in results if r is not None]

    def _validate_contract(self, dataset: Dataset) -> None:
        """
        Check the dataset against its structural and registered contracts.

        Raises:
            pandera.errors.SchemaError: If validation fails.
        """
        if not self.config.validate_contract:
            return

        self.schema.to_pandera(name=self.config.schema_name).validate(dataset.frame)

        info = SchemaRegistry.find(self.schema)
        if info is not None and info.contract is not None:
            info.contract.validate(dataset.frame)
            log.debug("Contract validation passed", schema=info.name)

    def _validate_derived(self, dataset: Dataset) -> None:
        """
        Check derived fields against the registered derived contract.

        Only runs when every column of that contract was derived.

        Raises:
            pandera.errors.SchemaError: If validation fails.
        """
        if not self.config.validate_contract:
            return

        info = SchemaRegistry.find(self.schema)
        if info is None or info.derived_contract is None:
            return
        required = set(info.derived_contract.to_schema().columns)
        if required <= set(dataset.schema.names):
            SchemaRegistry.validate(dataset.frame, info.name, derived=True)
            log.debug("Derived contract validation passed", schema=info.name)


def run_load(
    config: LoaderConfig,
    *,
    output_path: Path | None = None,
) -> LoadResult:
    """
    Run the load pipeline.

    Args:
        config: Loader configuration.
        output_path: Optional CSV output path overriding the config.

    Returns:
        LoadResult.

    Raises:
        LoaderError: On any discovery, parse or schema error.
    """
    pipeline = LoadPipeline(config)
    try:
        return pipeline.run(output_path=output_path)
    except LoaderError as e:
        log.error("Load failed", error=str(e), error_type=type(e).__name__)
        raise
