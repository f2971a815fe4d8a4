"""Commission Service — incoming payments and the customer's payout share.

Invariants:
    - A payment is addressed by (payment_id, claim_id) together; a mismatched pair is "not found"
    - complete_customer_payout refuses an already-completed payout (PayoutAlreadyCompletedError)
    - record_incoming_payment writes the 20/80 split to both the payment and its claim
    - One incoming payment per claim (PaymentAlreadyRecordedError)
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.commission import split_payment
from app.core.domain_types import ClaimStatus, PayoutStatus
from app.core.errors import (
    PayoutAlreadyCompletedError, PaymentAlreadyRecordedError, ResourceNotFoundError,
)
from app.models.claim import Claim
from app.models.incoming_payment import IncomingPayment

logger = logging.getLogger(__name__)


class CommissionService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_claim_payment(
        self, payment_id: UUID, claim_id: UUID,
    ) -> IncomingPayment:
        result = await self.db.execute(
            select(IncomingPayment)
            .where(IncomingPayment.id == payment_id)
            .where(IncomingPayment.claim_id == claim_id),
        )
        payment = result.scalar_one_or_none()
        if not payment:
            raise ResourceNotFoundError("Payment", str(payment_id))
        return payment

    async def complete_customer_payout(
        self,
        payment: IncomingPayment,
        reference: str,
        completed_at: datetime | None = None,
    ) -> datetime:
        """Mark the customer's share as transferred on the payment and its claim."""
        if payment.customer_payout_status == PayoutStatus.COMPLETED.value:
            raise PayoutAlreadyCompletedError(str(payment.id))

        now = completed_at or datetime.now(timezone.utc)
        payment.customer_payout_status = PayoutStatus.COMPLETED.value
        payment.customer_payout_date = now
        payment.customer_payout_reference = reference
        payment.updated_at = now

        claim = await self.db.get(Claim, payment.claim_id)
        if claim:
            claim.customer_payout_completed = True
            claim.customer_payout_date = now
            claim.updated_at = now

        await self.db.commit()
        logger.info(
            "Customer payout completed",
            extra={"payment_id": payment.id, "claim_id": payment.claim_id},
        )
        return now

    async def record_incoming_payment(
        self,
        claim_id: UUID,
        amount: Decimal,
        recorded_by: UUID,
        payment_source: str | None = None,
        payment_method: str | None = None,
        reference_number: str | None = None,
        received_date: datetime | None = None,
        notes: str | None = None,
    ) -> IncomingPayment:
        claim = await self.db.get(Claim, claim_id)
        if not claim:
            raise ResourceNotFoundError("Claim", str(claim_id))
        if claim.incoming_payment_amount:
            raise PaymentAlreadyRecordedError(str(claim_id))

        now = datetime.now(timezone.utc)
        received = received_date or now
        commission, payout = split_payment(amount)

        payment = IncomingPayment(
            claim_id=claim_id,
            amount=amount,
            payment_source=payment_source,
            payment_method=payment_method,
            reference_number=reference_number,
            received_date=received,
            recorded_by=recorded_by,
            notes=notes,
            commission_amount=commission,
            customer_payout=payout,
            customer_payout_status=PayoutStatus.PENDING.value,
        )
        self.db.add(payment)

        claim.incoming_payment_amount = amount
        claim.incoming_payment_date = received
        claim.incoming_payment_reference = reference_number
        claim.cashbus_commission_amount = commission
        claim.customer_payout_amount = payout
        claim.status = ClaimStatus.PAID.value
        claim.updated_at = now

        await self.db.commit()
        await self.db.refresh(payment)
        logger.info(
            f"Incoming payment recorded: {amount}",
            extra={"claim_id": claim_id, "payment_id": payment.id},
        )
        return payment
