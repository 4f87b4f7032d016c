"""Derived fields computed per record after loading."""

from claimload.features.definitions import (
    CLAIM_LIFETIME,
    YEAR_MONTH,
    Derivation,
    DerivationRegistry,
)
from claimload.features.derive import derive_fields

__all__ = [
    "CLAIM_LIFETIME",
    "YEAR_MONTH",
    "Derivation",
    "DerivationRegistry",
    "derive_fields",
]
