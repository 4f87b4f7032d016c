"""
Declarative derived-field definitions.

Derivations are defined using a registry pattern for explicit input
dependencies and testable per-record formulas.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from claimload.schemas.table import ColumnType
from claimload.utils.logging import get_logger

log = get_logger(__name__)

Record = Mapping[str, Any]


@dataclass(frozen=True)
class Derivation:
    """
    Definition of a derived field.

    Attributes:
        name: Field name (column name in output).
        func: Pure function computing the value from one record.
        inputs: Fields the function reads. If any is null, the result is null
            and func is not called.
        dtype: Type tag of the derived field.
        description: Human-readable description.
    """

    name: str
    func: Callable[[Record], Any]
    inputs: tuple[str, ...]
    dtype: ColumnType
    description: str = ""

    def apply(self, record: Record) -> Any:
        """Compute the field for one record, propagating nulls."""
        if any(record[name] is None for name in self.inputs):
            return None
        return self.func(record)


def _claim_lifetime(record: Record) -> int:
    return (record["transaction_date"] - record["incident_date"]).days


def _year_month(record: Record) -> str:
    return record["incident_date"].strftime("%Y%m")


CLAIM_LIFETIME = Derivation(
    name="claim_lifetime",
    func=_claim_lifetime,
    inputs=("incident_date", "transaction_date"),
    dtype=ColumnType.INTEGER,
    description="Days from incident to transaction (negative if inconsistent)",
)

YEAR_MONTH = Derivation(
    name="year_month",
    func=_year_month,
    inputs=("incident_date",),
    dtype=ColumnType.STRING,
    description="Incident year and month as YYYYMM",
)

# Claim transaction derivations
DERIVATIONS: list[Derivation] = [CLAIM_LIFETIME, YEAR_MONTH]


@dataclass
class DerivationRegistry:
    """
    Registry of available derivations.

    Provides lookup by the names used in configuration files.
    """

    derivations: dict[str, Derivation] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Initialize with the built-in derivations."""
        for derivation in DERIVATIONS:
            self.register(derivation)

    def register(self, derivation: Derivation) -> None:
        """
        Register a derivation.

        Args:
            derivation: Derivation to register.
        """
        if derivation.name in self.derivations:
            log.warning("Overwriting existing derivation", name=derivation.name)
        self.derivations[derivation.name] = derivation

    def get(self, name: str) -> Derivation:
        """
        Get a derivation by name.

        Raises:
            KeyError: If derivation not found.
        """
        if name not in self.derivations:
            available = ", ".join(self.derivations.keys())
            msg = f"Unknown derivation '{name}'. Available: {available}"
            raise KeyError(msg)
        return self.derivations[name]

    def resolve(self, names: list[str]) -> list[Derivation]:
        """Look up several derivations, keeping the given order."""
        return [self.get(name) for name in names]

    def list_derivations(self) -> list[str]:
        """List all registered derivation names."""
        return list(self.derivations.keys())
