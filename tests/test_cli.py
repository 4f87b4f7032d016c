"""Tests for the command-line interface."""

from collections.abc import Callable
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from claimload import __version__
from claimload.cli import app
from claimload.ingestion import parse_file
from claimload.schemas import CLAIM_TRANSACTION

# Wide console so rich does not wrap the asserted text
ENV = {"COLUMNS": "200"}


@pytest.fixture
def runner() -> CliRunner:
    """CLI runner."""
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path, claims_dir: Path) -> Path:
    """YAML config pointing at the claims directory."""
    path = tmp_path / "claims.yaml"
    path.write_text(
        f"""
discovery:
  directory: {claims_dir}
  suffix: .csv
schema:
  name: claim_transaction
derive: [claim_lifetime, year_month]
logging:
  level: WARNING
""",
        encoding="utf-8",
    )
    return path


class TestLoadCommand:
    """Tests for `claimload load`."""

    def test_load_with_config(
        self, runner: CliRunner, config_file: Path, tmp_path: Path
    ) -> None:
        """Test a successful load with output."""
        output = tmp_path / "out" / "combined.csv"

        result = runner.invoke(
            app, ["load", "-c", str(config_file), "-o", str(output)], env=ENV
        )

        assert result.exit_code == 0, result.output
        assert "Load Results" in result.stdout
        assert "claims_2017.csv" in result.stdout
        assert "year_month (string): 5/5 non-null" in result.stdout
        assert "Saved to:" in result.stdout
        derived = CLAIM_TRANSACTION.extend("claim_lifetime", "integer").extend(
            "year_month", "string"
        )
        assert len(parse_file(output, derived)) == 5

    def test_load_without_config(self, runner: CliRunner, claims_dir: Path) -> None:
        """Test a load configured only by options."""
        result = runner.invoke(
            app,
            [
                "load",
                "-d",
                str(claims_dir),
                "--schema",
                "claim_transaction",
                "--derive",
                "year_month",
                "-w",
                "2",
                "--log-level",
                "WARNING",
            ],
            env=ENV,
        )

        assert result.exit_code == 0, result.output
        assert "year_month (string)" in result.stdout
        assert "claim_lifetime" not in result.stdout

    def test_directory_override(
        self, runner: CliRunner, config_file: Path, tmp_path: Path
    ) -> None:
        """Test that -d overrides the config directory."""
        empty = tmp_path / "empty"
        empty.mkdir()

        result = runner.invoke(
            app, ["load", "-c", str(config_file), "-d", str(empty)], env=ENV
        )

        assert result.exit_code == 0, result.output
        assert "claims_2017.csv" not in result.stdout

    def test_missing_directory_exits_1(
        self, runner: CliRunner, config_file: Path, tmp_path: Path
    ) -> None:
        """Test that loader errors give exit code 1."""
        result = runner.invoke(
            app, ["load", "-c", str(config_file), "-d", str(tmp_path / "nope")], env=ENV
        )

        assert result.exit_code == 1
        assert "Directory not found" in result.stdout

    def test_bad_file_exits_1(
        self,
        runner: CliRunner,
        config_file: Path,
        claims_dir: Path,
        write_csv: Callable[..., Path],
    ) -> None:
        """Test that a parse error is reported with its location."""
        write_csv(
            claims_dir / "claims_2019.csv",
            ["IT,twenty,2001,2019-01-01,2019-01-02,2019-01-05,motor,1"],
        )

        result = runner.invoke(app, ["load", "-c", str(config_file)], env=ENV)

        assert result.exit_code == 1
        assert "row 2" in result.stdout
        assert "'year'" in result.stdout

    def test_missing_schema_exits_1(self, runner: CliRunner, claims_dir: Path) -> None:
        """Test that an incomplete configuration fails cleanly."""
        result = runner.invoke(app, ["load", "-d", str(claims_dir)], env=ENV)

        assert result.exit_code == 1
        assert "schema" in result.stdout


class TestInferCommand:
    """Tests for `claimload infer`."""

    def test_table(self, runner: CliRunner, claims_dir: Path) -> None:
        """Test the proposal table."""
        result = runner.invoke(
            app, ["infer", str(claims_dir / "claims_2017.csv")], env=ENV
        )

        assert result.exit_code == 0, result.output
        assert "Inferred schema: claims_2017.csv (3 rows)" in result.stdout
        assert "leading zeros" in result.stdout

    def test_yaml(self, runner: CliRunner, claims_dir: Path) -> None:
        """Test that --yaml prints a usable schema block."""
        result = runner.invoke(
            app,
            [
                "infer",
                str(claims_dir / "claims_2017.csv"),
                "--yaml",
                "--log-level",
                "WARNING",
            ],
            env=ENV,
        )

        assert result.exit_code == 0, result.output
        block = yaml.safe_load(result.stdout)
        assert block["schema"]["columns"]["claim_id"] == "string"
        assert block["schema"]["columns"]["year"] == "integer"
        assert block["schema"]["date_format"] == "%Y-%m-%d"

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test that a missing file is a usage error."""
        result = runner.invoke(app, ["infer", str(tmp_path / "missing.csv")], env=ENV)
        assert result.exit_code == 2


class TestValidateCommand:
    """Tests for `claimload validate`."""

    def test_all_pass(self, runner: CliRunner, config_file: Path) -> None:
        """Test a directory where every file passes."""
        result = runner.invoke(app, ["validate", "-c", str(config_file)], env=ENV)

        assert result.exit_code == 0, result.output
        assert "File Validation Results" in result.stdout
        assert "Passed: 2" in result.stdout

    def test_failure_exits_1(
        self,
        runner: CliRunner,
        config_file: Path,
        claims_dir: Path,
        write_csv: Callable[..., Path],
    ) -> None:
        """Test that one failing file gives exit code 1."""
        write_csv(
            claims_dir / "claims_2019.csv",
            ["IT,2019,2001,2019-01-01,2019-01-02,bad,motor,1"],
        )

        result = runner.invoke(app, ["validate", "-c", str(config_file)], env=ENV)

        assert result.exit_code == 1
        assert "Failed: 1" in result.stdout
        assert "DateParseError" in result.stdout


def test_version(runner: CliRunner) -> None:
    """Test the version command."""
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout
