"""Payout Schemas — admin payout confirmation and incoming payment recording.

Invariants:
    - Wire names are camelCase (claimId, paymentId, ...); Python attributes are snake_case
    - reference is non-empty after stripping
    - amount is strictly positive
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConfirmPayoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    claim_id: UUID = Field(alias="claimId")
    payment_id: UUID = Field(alias="paymentId")
    reference: str = Field(min_length=1, max_length=200)

    @field_validator("reference")
    @classmethod
    def strip_reference(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("reference cannot be empty or whitespace")
        return v


class RecordPaymentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    claim_id: UUID = Field(alias="claimId")
    amount: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    payment_source: str | None = Field(None, alias="paymentSource")
    payment_method: str | None = Field(None, alias="paymentMethod")
    reference_number: str | None = Field(None, alias="referenceNumber")
    received_date: datetime | None = Field(None, alias="receivedDate")
    notes: str | None = Field(None, max_length=2000)
