"""IncomingPayment ORM — money a bus company paid us on a claim.

Invariants:
    - commission_amount + customer_payout == amount (set by the commission service on insert)
    - customer_payout_status: pending -> initiated -> completed | failed
    - A completed payout is never re-confirmed (409 at the API)
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Text, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class IncomingPayment(Base):
    __tablename__ = "incoming_payments"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    claim_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("claims.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    payment_source: Mapped[str | None] = mapped_column(Text, nullable=True)
    payment_method: Mapped[str | None] = mapped_column(Text, nullable=True)
    reference_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    received_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    recorded_by: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    commission_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 2), nullable=True,
    )
    customer_payout: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 2), nullable=True,
    )
    customer_payout_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending", index=True,
    )
    customer_payout_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    customer_payout_reference: Mapped[str | None] = mapped_column(
        Text, nullable=True,
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
