"""Admin Withdrawals — list customer withdrawal requests and move them through their lifecycle.

Invariants:
    - ?status= is a comma-separated filter, default "pending,processing"
    - Rows ordered by requested_at ascending (oldest request first)
    - PATCH accepts only processing | completed | cancelled
    - Completing a withdrawal emits withdrawal_completed with the requester email and name
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_payout_notifier, json_body, require_admin
from app.core.domain_types import (
    ADMIN_WITHDRAWAL_TRANSITIONS, WithdrawalStatus, parse_status_filter,
)
from app.core.errors import InvalidFieldError
from app.infrastructure.database import get_db
from app.schemas.withdrawal import WithdrawalStatusUpdate
from app.services.notifications import PayoutNotifier
from app.services.withdrawal_service import WithdrawalService, serialize_withdrawal

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/admin/withdrawals", tags=["admin-withdrawals"])


@router.get("")
async def list_withdrawals(
    status_filter: str | None = Query(None, alias="status"),
    admin_id: UUID = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    requests = await WithdrawalService(db).list_requests(
        parse_status_filter(status_filter),
    )
    return {"requests": [serialize_withdrawal(w) for w in requests]}


@router.patch("/{withdrawal_id}")
async def update_withdrawal(
    withdrawal_id: UUID,
    admin_id: UUID = Depends(require_admin),
    body: WithdrawalStatusUpdate = Depends(json_body(WithdrawalStatusUpdate)),
    db: AsyncSession = Depends(get_db),
    notifier: PayoutNotifier = Depends(get_payout_notifier),
):
    if body.status not in ADMIN_WITHDRAWAL_TRANSITIONS:
        raise InvalidFieldError("Invalid status", "status")
    status = WithdrawalStatus(body.status)

    withdrawal = await WithdrawalService(db).update_status(
        withdrawal_id, status, body.admin_notes,
    )

    response = {"success": True, "withdrawal": serialize_withdrawal(withdrawal)}
    customer = response["withdrawal"]["profiles"] or {}

    if status == WithdrawalStatus.COMPLETED:
        try:
            await notifier.handle_withdrawal_completed(
                withdrawal.claim_id,
                withdrawal_id,
                withdrawal.amount,
                customer_email=customer.get("email"),
                customer_name=customer.get("full_name"),
                performed_by=admin_id,
            )
        except Exception as e:
            logger.error(
                f"Failed to notify customer of completed withdrawal: {e}",
                extra={"withdrawal_id": withdrawal_id},
            )

    return response
