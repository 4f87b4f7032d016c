"""
Schemas for claim transaction data.

One row per payment or reserve movement on a claim. Claim identifiers are
strings: they frequently carry leading zeros ("007") and must never be
read as numbers.
"""

import pandas as pd
import pandera.pandas as pa
from pandera.typing import Series

from claimload.schemas.table import ColumnType, TableSchema

CLAIM_TRANSACTION = TableSchema.from_mapping(
    {
        "country_code": ColumnType.STRING,
        "year": ColumnType.INTEGER,
        "claim_id": ColumnType.STRING,
        "incident_date": ColumnType.DATE,
        "report_date": ColumnType.DATE,
        "transaction_date": ColumnType.DATE,
        "claim_type": ColumnType.STRING,
        "amount": ColumnType.FLOAT,
    }
)


class ClaimTransactionSchema(pa.DataFrameModel):
    """
    Contract for loaded claim transactions.

    Checks the coerced types only. Values are never converted here.
    """

    country_code: Series[pd.StringDtype] = pa.Field(
        nullable=True,
        description="Country code of the policy",
    )
    year: Series[pd.Int64Dtype] = pa.Field(
        ge=1900,
        le=2100,
        nullable=True,
        description="Accident or underwriting year",
    )
    claim_id: Series[pd.StringDtype] = pa.Field(
        nullable=False,
        description="Claim identifier (string, leading zeros significant)",
    )
    incident_date: Series[pa.Date] = pa.Field(
        nullable=True,
        description="Date the loss occurred",
    )
    report_date: Series[pa.Date] = pa.Field(
        nullable=True,
        description="Date the loss was reported",
    )
    transaction_date: Series[pa.Date] = pa.Field(
        nullable=True,
        description="Date of the payment or reserve movement",
    )
    claim_type: Series[pd.StringDtype] = pa.Field(
        nullable=True,
        description="Line or type of claim",
    )
    amount: Series[pd.Float64Dtype] = pa.Field(
        nullable=True,
        description="Transaction amount",
    )

    class Config:
        """Schema configuration."""

        name = "ClaimTransactionSchema"
        strict = False  # Derived columns may follow
        coerce = False


class DerivedClaimTransactionSchema(ClaimTransactionSchema):
    """Claim transactions with claim_lifetime and year_month derived."""

    claim_lifetime: Series[pd.Int64Dtype] = pa.Field(
        nullable=True,
        description="Days between incident and transaction (may be negative)",
    )
    year_month: Series[pd.StringDtype] = pa.Field(
        nullable=True,
        str_length={"min_value": 6, "max_value": 6},
        description="Incident year and month as YYYYMM",
    )

    class Config:
        """Schema configuration."""

        name = "DerivedClaimTransactionSchema"
        strict = False
        coerce = False
