"""Withdrawal Service — admin view and status changes for customer payout requests.

Invariants:
    - list_requests filters by status membership and orders by requested_at ascending
    - update_status sets processed_at only for completed/cancelled
    - Completing a withdrawal completes the claim payout and every payment of that claim
"""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.commission import to_float
from app.core.domain_types import PayoutStatus, WithdrawalStatus
from app.core.errors import ResourceNotFoundError
from app.models.claim import Claim
from app.models.incoming_payment import IncomingPayment
from app.models.withdrawal_request import WithdrawalRequest

logger = logging.getLogger(__name__)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def serialize_withdrawal(w: WithdrawalRequest) -> dict[str, Any]:
    """Withdrawal row plus the joined requester profile and claim summary."""
    return {
        "id": str(w.id),
        "user_id": str(w.user_id),
        "claim_id": str(w.claim_id),
        "incoming_payment_id": str(w.incoming_payment_id),
        "amount": to_float(w.amount),
        "bank_name": w.bank_name,
        "bank_branch": w.bank_branch,
        "bank_account_number": w.bank_account_number,
        "bank_account_owner_name": w.bank_account_owner_name,
        "status": w.status,
        "user_notes": w.user_notes,
        "admin_notes": w.admin_notes,
        "requested_at": _iso(w.requested_at),
        "processed_at": _iso(w.processed_at),
        "updated_at": _iso(w.updated_at),
        "profiles": {
            "full_name": w.profile.full_name,
            "phone": w.profile.phone,
            "email": w.profile.email,
        } if w.profile else None,
        "claims": {
            "bus_company": w.claim.bus_company,
            "claim_amount": to_float(w.claim.claim_amount),
            "incoming_payment_amount": to_float(w.claim.incoming_payment_amount),
        } if w.claim else None,
    }


class WithdrawalService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_requests(self, statuses: list[str]) -> list[WithdrawalRequest]:
        result = await self.db.execute(
            select(WithdrawalRequest)
            .where(WithdrawalRequest.status.in_(statuses))
            .order_by(WithdrawalRequest.requested_at.asc()),
        )
        return list(result.scalars().all())

    async def update_status(
        self,
        withdrawal_id: UUID,
        status: WithdrawalStatus,
        admin_notes: str | None = None,
    ) -> WithdrawalRequest:
        withdrawal = await self.db.get(WithdrawalRequest, withdrawal_id)
        if not withdrawal:
            raise ResourceNotFoundError("Withdrawal request", str(withdrawal_id))

        now = datetime.now(timezone.utc)
        withdrawal.status = status.value
        withdrawal.admin_notes = admin_notes
        withdrawal.updated_at = now
        if status in (WithdrawalStatus.COMPLETED, WithdrawalStatus.CANCELLED):
            withdrawal.processed_at = now

        if status == WithdrawalStatus.COMPLETED:
            await self.db.execute(
                update(Claim)
                .where(Claim.id == withdrawal.claim_id)
                .values(
                    customer_payout_completed=True,
                    customer_payout_date=now,
                    updated_at=now,
                ),
            )
            await self.db.execute(
                update(IncomingPayment)
                .where(IncomingPayment.claim_id == withdrawal.claim_id)
                .values(
                    customer_payout_status=PayoutStatus.COMPLETED.value,
                    customer_payout_date=now,
                    customer_payout_reference=f"withdrawal-{withdrawal_id}",
                    updated_at=now,
                ),
            )

        await self.db.commit()
        await self.db.refresh(withdrawal)
        logger.info(
            f"Withdrawal moved to {status.value}",
            extra={"withdrawal_id": withdrawal_id, "claim_id": withdrawal.claim_id},
        )
        return withdrawal
