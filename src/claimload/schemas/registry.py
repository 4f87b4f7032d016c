"""
Schema registry for lookup by name.

Maps schema names used in configuration files to their table declaration
and, where one exists, their pandera contract.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

import pandera.pandas as pa

from claimload.schemas.claims import (
    CLAIM_TRANSACTION,
    ClaimTransactionSchema,
    DerivedClaimTransactionSchema,
)
from claimload.schemas.table import TableSchema

if TYPE_CHECKING:
    import pandas as pd


@dataclass(frozen=True)
class SchemaInfo:
    """Metadata about a registered schema."""

    name: str
    table: TableSchema
    version: str
    description: str
    contract: type[pa.DataFrameModel] | None = None
    derived_contract: type[pa.DataFrameModel] | None = None


class SchemaRegistry:
    """
    Centralized registry for all table schemas.

    Provides schema lookup by name and by table declaration.
    """

    _schemas: ClassVar[dict[str, SchemaInfo]] = {
        "claim_transaction": SchemaInfo(
            name="claim_transaction",
            table=CLAIM_TRANSACTION,
            version="1.0.0",
            description="Claim payment and reserve transactions",
            contract=ClaimTransactionSchema,
            derived_contract=DerivedClaimTransactionSchema,
        ),
    }

    @classmethod
    def get(cls, name: str) -> TableSchema:
        """
        Get a table schema by name.

        Args:
            name: Schema identifier.

        Returns:
            The registered TableSchema.

        Raises:
            KeyError: If schema not found.
        """
        return cls.get_info(name).table

    @classmethod
    def get_info(cls, name: str) -> SchemaInfo:
        """
        Get full schema info by name.

        Raises:
            KeyError: If schema not found.
        """
        if name not in cls._schemas:
            available = ", ".join(cls._schemas.keys())
            msg = f"Unknown schema '{name}'. Available: {available}"
            raise KeyError(msg)
        return cls._schemas[name]

    @classmethod
    def find(cls, table: TableSchema) -> SchemaInfo | None:
        """Find the registered entry whose table equals the given one."""
        for info in cls._schemas.values():
            if info.table == table:
                return info
        return None

    @classmethod
    def list_schemas(cls) -> list[str]:
        """List all registered schema names."""
        return list(cls._schemas.keys())

    @classmethod
    def validate(
        cls, df: "pd.DataFrame", schema_name: str, *, derived: bool = False
    ) -> "pd.DataFrame":
        """
        Validate a DataFrame against a registered contract.

        Args:
            df: DataFrame to validate.
            schema_name: Name of schema to validate against.
            derived: Use the contract that includes derived fields.

        Returns:
            Validated DataFrame.

        Raises:
            KeyError: If schema not found or it has no contract.
            pandera.errors.SchemaError: If validation fails.
        """
        info = cls.get_info(schema_name)
        contract = info.derived_contract if derived else info.contract
        if contract is None:
            msg = f"Schema '{schema_name}' has no contract"
            raise KeyError(msg)
        return contract.validate(df)
