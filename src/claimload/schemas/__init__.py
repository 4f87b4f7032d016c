"""
Table schemas and pandera contracts.

All data contracts are defined here to ensure explicit, typed columns
throughout the loader. Nothing is inferred implicitly.
"""

from claimload.schemas.claims import (
    CLAIM_TRANSACTION,
    ClaimTransactionSchema,
    DerivedClaimTransactionSchema,
)
from claimload.schemas.dataset import Dataset
from claimload.schemas.registry import SchemaInfo, SchemaRegistry
from claimload.schemas.table import ISO_DATE_FORMAT, ColumnType, TableSchema

__all__ = [
    "CLAIM_TRANSACTION",
    "ISO_DATE_FORMAT",
    "ClaimTransactionSchema",
    "ColumnType",
    "Dataset",
    "DerivedClaimTransactionSchema",
    "SchemaInfo",
    "SchemaRegistry",
    "TableSchema",
]
