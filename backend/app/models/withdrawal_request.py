"""WithdrawalRequest ORM — a customer asking for their payout share to be transferred.

Invariants:
    - status: pending -> processing -> completed | cancelled
    - processed_at set exactly when status reaches completed or cancelled
    - Bank fields are a snapshot taken at request time

Design Decisions:
    - profile/claim relationships eager-loaded (selectin): the admin list always renders both
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import String, Text, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.claim import Claim
    from app.models.profile import Profile


class WithdrawalRequest(Base):
    __tablename__ = "withdrawal_requests"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    claim_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("claims.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    incoming_payment_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("incoming_payments.id", ondelete="CASCADE"),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    bank_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    bank_branch: Mapped[str | None] = mapped_column(Text, nullable=True)
    bank_account_number: Mapped[str | None] = mapped_column(Text, nullable=True)
    bank_account_owner_name: Mapped[str | None] = mapped_column(
        Text, nullable=True,
    )

    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending", index=True,
    )
    user_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    requested_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    processed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    profile: Mapped["Profile"] = relationship("Profile", lazy="selectin")
    claim: Mapped["Claim"] = relationship("Claim", lazy="selectin")
