"""Basic package tests to verify installation."""


def test_package_imports() -> None:
    """Verify the main package can be imported."""
    import claimload

    assert claimload.__version__


def test_config_module_imports() -> None:
    """Verify config module structure is correct."""
    from claimload.config import (
        DiscoveryConfig,
        LoaderConfig,
        ParseConfig,
        SchemaConfig,
        load_config,
    )

    assert DiscoveryConfig is not None
    assert LoaderConfig is not None
    assert ParseConfig is not None
    assert SchemaConfig is not None
    assert load_config is not None


def test_pipeline_modules_import() -> None:
    """Verify the pipeline stages are exported."""
    from claimload.etl import concatenate, run_load
    from claimload.export import write_csv
    from claimload.features import derive_fields
    from claimload.ingestion import discover_files, infer_schema, parse_file

    assert discover_files is not None
    assert parse_file is not None
    assert infer_schema is not None
    assert concatenate is not None
    assert derive_fields is not None
    assert write_csv is not None
    assert run_load is not None
