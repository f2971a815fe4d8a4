"""Admin Payouts — confirm-payout and record-payment routes.

Invariants:
    - Confirming marks both the payment and its claim as paid out, and logs the event
    - A second confirmation of the same payout is a 409, not a silent success
    - paymentId must belong to claimId (404 otherwise)
    - A failing notification never fails the payout
    - Recording a payment stores the 20% commission split on payment and claim
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import select

from app.api.dependencies import get_payout_notifier
from app.core.errors import NotificationError
from app.main import app
from app.models.claim import Claim
from app.models.execution_log import ExecutionLog
from app.models.incoming_payment import IncomingPayment
from tests.services.fakes import ADMIN, ADMIN_ID, USER_ID


@pytest.fixture
async def seed_claim(test_db, seed_profiles):
    claim = Claim(
        user_id=USER_ID, bus_company="egged",
        claim_amount=Decimal("500.00"), status="approved",
    )
    test_db.add(claim)
    await test_db.commit()
    await test_db.refresh(claim)
    return claim


@pytest.fixture
async def seed_payment(test_db, seed_claim):
    payment = IncomingPayment(
        claim_id=seed_claim.id,
        amount=Decimal("250.00"),
        received_date=datetime(2026, 9, 1, tzinfo=timezone.utc),
        commission_amount=Decimal("50.00"),
        customer_payout=Decimal("200.00"),
        customer_payout_status="pending",
    )
    test_db.add(payment)
    await test_db.commit()
    await test_db.refresh(payment)
    return payment


def _confirm_body(payment, reference="BANK-TRX-1001"):
    return {
        "claimId": str(payment.claim_id),
        "paymentId": str(payment.id),
        "reference": reference,
    }


class _FailingNotifier:
    async def handle_payout_completed(self, *args, **kwargs):
        raise NotificationError("webhook down")

    async def handle_incoming_payment_recorded(self, *args, **kwargs):
        raise NotificationError("webhook down")


# ─── confirm-payout ─────────────────────────────────────────────

async def test_confirm_payout_returns_summary(client, seed_payment):
    res = await client.post(
        "/api/admin/confirm-payout", json=_confirm_body(seed_payment), headers=ADMIN,
    )
    assert res.status_code == 200
    data = res.json()
    assert data["success"] is True
    assert data["payout"]["paymentId"] == str(seed_payment.id)
    assert data["payout"]["claimId"] == str(seed_payment.claim_id)
    assert data["payout"]["customerPayout"] == 200.0
    assert data["payout"]["reference"] == "BANK-TRX-1001"
    assert data["payout"]["completedAt"]


async def test_confirm_payout_updates_payment_and_claim(client, seed_payment, fresh_db):
    await client.post(
        "/api/admin/confirm-payout", json=_confirm_body(seed_payment), headers=ADMIN,
    )

    payment = await fresh_db.get(IncomingPayment, seed_payment.id)
    assert payment.customer_payout_status == "completed"
    assert payment.customer_payout_reference == "BANK-TRX-1001"
    assert payment.customer_payout_date is not None

    claim = await fresh_db.get(Claim, seed_payment.claim_id)
    assert claim.customer_payout_completed is True
    assert claim.customer_payout_date is not None


async def test_confirm_payout_logs_workflow_event(client, seed_payment, fresh_db):
    await client.post(
        "/api/admin/confirm-payout", json=_confirm_body(seed_payment), headers=ADMIN,
    )

    result = await fresh_db.execute(
        select(ExecutionLog).where(ExecutionLog.claim_id == seed_payment.claim_id),
    )
    logs = result.scalars().all()
    assert [log.action_type for log in logs] == ["payout_completed"]
    assert logs[0].performed_by == ADMIN_ID
    assert logs[0].details["reference"] == "BANK-TRX-1001"


async def test_second_confirmation_returns_409(client, seed_payment):
    first = await client.post(
        "/api/admin/confirm-payout", json=_confirm_body(seed_payment), headers=ADMIN,
    )
    second = await client.post(
        "/api/admin/confirm-payout",
        json=_confirm_body(seed_payment, "BANK-TRX-1002"),
        headers=ADMIN,
    )
    assert first.status_code == 200
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "PAYOUT_ALREADY_COMPLETED"


async def test_second_confirmation_keeps_first_reference(client, seed_payment, fresh_db):
    await client.post(
        "/api/admin/confirm-payout", json=_confirm_body(seed_payment), headers=ADMIN,
    )
    await client.post(
        "/api/admin/confirm-payout",
        json=_confirm_body(seed_payment, "BANK-TRX-1002"),
        headers=ADMIN,
    )
    payment = await fresh_db.get(IncomingPayment, seed_payment.id)
    assert payment.customer_payout_reference == "BANK-TRX-1001"


async def test_payment_of_another_claim_returns_404(client, seed_payment):
    body = _confirm_body(seed_payment)
    body["claimId"] = str(uuid4())
    res = await client.post("/api/admin/confirm-payout", json=body, headers=ADMIN)
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_missing_reference_returns_400(client, seed_payment):
    body = _confirm_body(seed_payment)
    del body["reference"]
    res = await client.post("/api/admin/confirm-payout", json=body, headers=ADMIN)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert "reference" in res.json()["error"]["message"]


async def test_blank_reference_returns_400(client, seed_payment):
    res = await client.post(
        "/api/admin/confirm-payout",
        json=_confirm_body(seed_payment, "   "),
        headers=ADMIN,
    )
    assert res.status_code == 400


async def test_notification_failure_does_not_fail_payout(client, seed_payment, fresh_db):
    app.dependency_overrides[get_payout_notifier] = _FailingNotifier
    res = await client.post(
        "/api/admin/confirm-payout", json=_confirm_body(seed_payment), headers=ADMIN,
    )
    assert res.status_code == 200
    payment = await fresh_db.get(IncomingPayment, seed_payment.id)
    assert payment.customer_payout_status == "completed"


# ─── record-payment ─────────────────────────────────────────────

async def test_record_payment_splits_commission(client, seed_claim, fresh_db):
    res = await client.post(
        "/api/admin/record-payment",
        json={
            "claimId": str(seed_claim.id),
            "amount": 100,
            "paymentMethod": "bank_transfer",
            "referenceNumber": "EGD-7781",
        },
        headers=ADMIN,
    )
    assert res.status_code == 200
    payment = res.json()["payment"]
    assert payment["amount"] == 100.0
    assert payment["commissionAmount"] == 20.0
    assert payment["customerPayout"] == 80.0

    claim = await fresh_db.get(Claim, seed_claim.id)
    assert claim.status == "paid"
    assert claim.incoming_payment_amount == Decimal("100")
    assert claim.cashbus_commission_amount == Decimal("20.00")
    assert claim.customer_payout_amount == Decimal("80.00")
    assert claim.incoming_payment_reference == "EGD-7781"


async def test_record_payment_rounds_to_cents(client, seed_claim):
    res = await client.post(
        "/api/admin/record-payment",
        json={"claimId": str(seed_claim.id), "amount": "33.33"},
        headers=ADMIN,
    )
    payment = res.json()["payment"]
    assert payment["commissionAmount"] == 6.67
    assert payment["customerPayout"] == 26.66


async def test_record_payment_twice_returns_409(client, seed_claim):
    body = {"claimId": str(seed_claim.id), "amount": 100}
    await client.post("/api/admin/record-payment", json=body, headers=ADMIN)
    res = await client.post("/api/admin/record-payment", json=body, headers=ADMIN)
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "PAYMENT_ALREADY_RECORDED"


async def test_record_payment_unknown_claim_returns_404(client, seed_profiles):
    res = await client.post(
        "/api/admin/record-payment",
        json={"claimId": str(uuid4()), "amount": 100},
        headers=ADMIN,
    )
    assert res.status_code == 404


async def test_record_payment_rejects_non_positive_amount(client, seed_claim):
    res = await client.post(
        "/api/admin/record-payment",
        json={"claimId": str(seed_claim.id), "amount": 0},
        headers=ADMIN,
    )
    assert res.status_code == 400


async def test_recorded_payment_can_then_be_confirmed(client, seed_claim):
    recorded = await client.post(
        "/api/admin/record-payment",
        json={"claimId": str(seed_claim.id), "amount": 100},
        headers=ADMIN,
    )
    payment_id = recorded.json()["payment"]["id"]
    res = await client.post(
        "/api/admin/confirm-payout",
        json={"claimId": str(seed_claim.id), "paymentId": payment_id, "reference": "TRX-9"},
        headers=ADMIN,
    )
    assert res.status_code == 200
    assert res.json()["payout"]["customerPayout"] == 80.0
