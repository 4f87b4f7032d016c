"""Tests for validation module."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from claimload.config import LoaderConfig, build_config
from claimload.errors import DirectoryNotFound
from claimload.validation import ConsoleReporter, ValidationResult, ValidationRunner


@pytest.fixture
def mixed_dir(
    claims_dir: Path,
    write_csv: Callable[..., Path],
) -> Path:
    """Claims directory with one unparseable and one contract-violating file."""
    write_csv(
        claims_dir / "claims_2019.csv",
        ["IT,2019,2001,2019-01-01,2019-01-02,2019-13-40,motor,1"],
    )
    write_csv(
        claims_dir / "claims_2020.csv",
        ["IT,20,2002,2020-01-01,2020-01-02,2020-01-05,motor,1"],
    )
    return claims_dir


class TestValidationResult:
    """Tests for ValidationResult dataclass."""

    def test_valid_result(self) -> None:
        """Test creating valid result."""
        result = ValidationResult(
            file_path=Path("/data/claims_2017.csv"),
            schema_name="claim_transaction",
            valid=True,
            row_count=3,
            error_type=None,
            error_message=None,
        )
        assert result.valid
        assert result.file_name == "claims_2017.csv"

    def test_invalid_result(self) -> None:
        """Test creating invalid result."""
        result = ValidationResult(
            file_path=Path("/data/claims_2019.csv"),
            schema_name=None,
            valid=False,
            row_count=None,
            error_type="DateParseError",
            error_message="bad date",
        )
        assert not result.valid
        assert result.error_type == "DateParseError"


class TestValidationRunner:
    """Tests for ValidationRunner."""

    def test_all_valid(self, loader_config: LoaderConfig) -> None:
        """Test a directory where every file passes."""
        results = ValidationRunner(loader_config).run()

        assert [r.file_name for r in results] == ["claims_2017.csv", "claims_2018.csv"]
        assert all(r.valid for r in results)
        assert [r.row_count for r in results] == [3, 2]
        assert results[0].schema_name == "claim_transaction"

    def test_failures_do_not_stop_run(
        self, base_config_data: dict[str, Any], mixed_dir: Path
    ) -> None:
        """Test that every file is reported even when some fail."""
        results = ValidationRunner(build_config(base_config_data)).run()

        by_name = {r.file_name: r for r in results}
        assert len(results) == 4
        assert by_name["claims_2017.csv"].valid
        assert not by_name["claims_2019.csv"].valid
        assert by_name["claims_2019.csv"].error_type == "DateParseError"
        assert "row 2" in (by_name["claims_2019.csv"].error_message or "")
        assert not by_name["claims_2020.csv"].valid
        assert by_name["claims_2020.csv"].error_type == "SchemaError"

    def test_contract_skipped_when_disabled(
        self, base_config_data: dict[str, Any], mixed_dir: Path
    ) -> None:
        """Test that validate_contract: false only checks parsing."""
        config = build_config({**base_config_data, "validate_contract": False})

        results = ValidationRunner(config).run()

        assert {r.file_name for r in results if not r.valid} == {"claims_2019.csv"}

    def test_inline_schema_has_no_contract(
        self, base_config_data: dict[str, Any], claims_dir: Path
    ) -> None:
        """Test that inline schemas are only checked structurally."""
        config = build_config(
            {
                **base_config_data,
                "parse": {"unknown_columns": "ignore"},
                "schema": {"columns": {"claim_id": "string"}},
            }
        )

        runner = ValidationRunner(config)

        assert runner.contract is None
        assert all(r.valid for r in runner.run())

    def test_missing_directory(self, base_config_data: dict[str, Any], tmp_path: Path) -> None:
        """Test that a missing directory is not reported per file."""
        config = build_config(
            {**base_config_data, "discovery": {"directory": str(tmp_path / "nope")}}
        )
        with pytest.raises(DirectoryNotFound):
            ValidationRunner(config).run()


class TestConsoleReporter:
    """Tests for ConsoleReporter output."""

    def test_summary(self, base_config_data: dict[str, Any], mixed_dir: Path) -> None:
        """Test that the report lists files and counts."""
        results = ValidationRunner(build_config(base_config_data)).run()
        console = Console(record=True, width=200)

        ConsoleReporter(console).print_results(results)
        text = console.export_text()

        assert "File Validation Results" in text
        assert "claims_2019.csv" in text
        assert "Total files: 4" in text
        assert "Passed: 2" in text
        assert "Failed: 2" in text
        assert "Validation Errors:" in text
