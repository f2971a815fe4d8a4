"""Admin Payouts — confirm customer payouts and record incoming bus-company payments.

Invariants:
    - Both endpoints require an admin (401/403 before the body is validated)
    - Payment must match both paymentId and claimId (404 otherwise)
    - Second confirmation of the same payout -> 409
    - Notification failure after a completed payout is logged, never returned to the caller
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_payout_notifier, json_body, require_admin
from app.core.commission import to_float
from app.infrastructure.database import get_db
from app.schemas.payout import ConfirmPayoutRequest, RecordPaymentRequest
from app.services.commission_service import CommissionService
from app.services.notifications import PayoutNotifier

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/admin", tags=["admin-payouts"])


@router.post("/confirm-payout")
async def confirm_payout(
    admin_id: UUID = Depends(require_admin),
    body: ConfirmPayoutRequest = Depends(json_body(ConfirmPayoutRequest)),
    db: AsyncSession = Depends(get_db),
    notifier: PayoutNotifier = Depends(get_payout_notifier),
):
    """Admin confirms the customer's share was transferred to their bank account."""
    service = CommissionService(db)
    payment = await service.get_claim_payment(body.payment_id, body.claim_id)
    completed_at = await service.complete_customer_payout(payment, body.reference)
    customer_payout = payment.customer_payout

    try:
        await notifier.handle_payout_completed(
            body.claim_id, customer_payout, body.reference,
            performed_by=admin_id,
        )
    except Exception as e:
        logger.error(
            f"Notification error (payout still confirmed): {e}",
            extra={"claim_id": body.claim_id, "payment_id": body.payment_id},
        )

    return {
        "success": True,
        "payout": {
            "paymentId": str(body.payment_id),
            "claimId": str(body.claim_id),
            "customerPayout": to_float(customer_payout),
            "reference": body.reference,
            "completedAt": completed_at.isoformat(),
        },
    }


@router.post("/record-payment")
async def record_payment(
    admin_id: UUID = Depends(require_admin),
    body: RecordPaymentRequest = Depends(json_body(RecordPaymentRequest)),
    db: AsyncSession = Depends(get_db),
    notifier: PayoutNotifier = Depends(get_payout_notifier),
):
    """Admin records that a bus company paid compensation on a claim."""
    payment = await CommissionService(db).record_incoming_payment(
        body.claim_id,
        body.amount,
        recorded_by=admin_id,
        payment_source=body.payment_source,
        payment_method=body.payment_method,
        reference_number=body.reference_number,
        received_date=body.received_date,
        notes=body.notes,
    )
    # A failed notification rolls the session back and expires loaded rows
    payment_id = payment.id
    recorded = {
        "id": str(payment_id),
        "amount": to_float(payment.amount),
        "commissionAmount": to_float(payment.commission_amount),
        "customerPayout": to_float(payment.customer_payout),
        "receivedDate": payment.received_date.isoformat(),
    }

    try:
        await notifier.handle_incoming_payment_recorded(
            body.claim_id, payment_id, body.amount, performed_by=admin_id,
        )
    except Exception as e:
        logger.error(
            f"Notification error (payment still recorded): {e}",
            extra={"claim_id": body.claim_id, "payment_id": payment_id},
        )

    return {"success": True, "payment": recorded}
