"""Claim ORM — a customer's compensation claim against a bus company.

Invariants:
    - incoming_payment_* columns mirror the single incoming payment recorded for the claim
    - customer_payout_completed flips to True once, when the 80% share reaches the customer

Design Decisions:
    - Payment figures denormalized onto the claim: admin lists read them without a JOIN
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Text, Numeric, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class Claim(Base):
    __tablename__ = "claims"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    bus_company: Mapped[str] = mapped_column(Text, nullable=False)
    claim_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="draft",
    )

    incoming_payment_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 2), nullable=True,
    )
    incoming_payment_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    incoming_payment_reference: Mapped[str | None] = mapped_column(
        Text, nullable=True,
    )
    cashbus_commission_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 2), nullable=True,
    )
    customer_payout_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 2), nullable=True,
    )
    customer_payout_completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    customer_payout_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
