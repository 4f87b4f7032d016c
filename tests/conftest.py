"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog

from claimload.config import LoaderConfig, build_config

CLAIM_HEADER = (
    "country_code,year,claim_id,incident_date,report_date,"
    "transaction_date,claim_type,amount"
)


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo logging configuration done by CLI tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def write_csv() -> Callable[..., Path]:
    """Return a helper writing header + lines to a UTF-8 text file."""

    def _write(path: Path, lines: list[str], header: str = CLAIM_HEADER) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join([header, *lines]) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def claims_2017_lines() -> list[str]:
    """Claim transactions for 2017 with identifier-like claim ids."""
    return [
        "DE,2017,007,2017-01-01,2017-01-05,2017-01-11,motor,1500.5",
        "DE,2017,008,2017-05-23,2017-06-01,2017-07-01,property,200",
        "DE,2017,0100,2017-03-10,2017-03-12,2017-03-15,motor,",
    ]


@pytest.fixture
def claims_2018_lines() -> list[str]:
    """Claim transactions for 2018."""
    return [
        "FR,2018,1001,2018-02-01,2018-02-03,2018-02-10,liability,999.99",
        "FR,2018,1002,2018-04-15,,2018-04-20,motor,-50",
    ]


@pytest.fixture
def claims_dir(
    tmp_path: Path,
    write_csv: Callable[..., Path],
    claims_2017_lines: list[str],
    claims_2018_lines: list[str],
) -> Path:
    """Directory with two claim CSV files and one unrelated file."""
    directory = tmp_path / "claims"
    write_csv(directory / "claims_2018.csv", claims_2018_lines)
    write_csv(directory / "claims_2017.csv", claims_2017_lines)
    (directory / "notes.txt").write_text("not a claim file\n", encoding="utf-8")
    return directory


@pytest.fixture
def base_config_data(claims_dir: Path) -> dict[str, Any]:
    """Minimal configuration mapping in YAML layout."""
    return {
        "discovery": {"directory": str(claims_dir), "suffix": ".csv"},
        "schema": {"name": "claim_transaction"},
        "derive": ["claim_lifetime", "year_month"],
    }


@pytest.fixture
def loader_config(base_config_data: dict[str, Any]) -> LoaderConfig:
    """Validated configuration for the claims directory."""
    return build_config(base_config_data)
