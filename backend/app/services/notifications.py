"""Payout Notifications — workflow side effects after money moves.

Invariants:
    - Every handled event appends one execution_logs row
    - Webhook delivery happens only when a webhook client is configured
    - Any failure surfaces as NotificationError; callers log and continue
      (a completed payout is never rolled back because a notification failed)
    - withdrawal_completed events carry the requester email and name so the
      webhook consumer can send the customer confirmation
"""

import logging
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.commission import to_float
from app.core.errors import NotificationError
from app.infrastructure.webhook_client import WebhookClient
from app.models.execution_log import ExecutionLog
from app.services.settings_store import SettingsStore, get_admin_email

logger = logging.getLogger(__name__)


class PayoutNotifier:
    def __init__(
        self,
        db: AsyncSession,
        webhook: WebhookClient | None = None,
        default_admin_email: str = "",
    ):
        self.db = db
        self.webhook = webhook
        self.default_admin_email = default_admin_email

    async def handle_payout_completed(
        self,
        claim_id: UUID,
        amount: Decimal | None,
        reference: str,
        performed_by: UUID | None = None,
    ) -> None:
        await self._emit(
            claim_id=claim_id,
            performed_by=performed_by,
            action_type="payout_completed",
            description="התשלום ללקוח הועבר",
            details={"amount": to_float(amount), "reference": reference},
        )

    async def handle_withdrawal_completed(
        self,
        claim_id: UUID,
        withdrawal_id: UUID,
        amount: Decimal | None,
        customer_email: str | None,
        customer_name: str | None,
        performed_by: UUID | None = None,
    ) -> None:
        """Customer payout sent for a withdrawal request; carries who to confirm it to."""
        await self._emit(
            claim_id=claim_id,
            performed_by=performed_by,
            action_type="withdrawal_completed",
            description="בקשת המשיכה הושלמה והכסף הועבר ללקוח",
            details={
                "amount": to_float(amount),
                "reference": f"withdrawal-{withdrawal_id}",
                "withdrawal_id": str(withdrawal_id),
                "customer_email": customer_email,
                "customer_name": customer_name,
            },
        )

    async def handle_incoming_payment_recorded(
        self,
        claim_id: UUID,
        payment_id: UUID,
        amount: Decimal,
        performed_by: UUID | None = None,
    ) -> None:
        await self._emit(
            claim_id=claim_id,
            performed_by=performed_by,
            action_type="incoming_payment_recorded",
            description="תשלום מחברת האוטובוסים נרשם",
            details={"amount": to_float(amount), "payment_id": str(payment_id)},
        )

    async def _emit(
        self,
        claim_id: UUID,
        performed_by: UUID | None,
        action_type: str,
        description: str,
        details: dict[str, Any],
    ) -> None:
        try:
            self.db.add(ExecutionLog(
                claim_id=claim_id,
                performed_by=performed_by,
                action_type=action_type,
                description=description,
                details=details,
            ))
            await self.db.commit()
            admin_email = await get_admin_email(
                SettingsStore(self.db), self.default_admin_email,
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise NotificationError(f"could not log {action_type}: {e}")

        if self.webhook:
            await self.webhook.send({
                "event": action_type,
                "claim_id": str(claim_id),
                "admin_email": admin_email,
                **details,
            })
        logger.info(f"Workflow event: {action_type}", extra={"claim_id": claim_id})
