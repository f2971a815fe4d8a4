"""Domain Types — enums and value types shared by routes, services and models.

Invariants:
    - All valid states encoded as Enums — no raw string matching in handlers
    - Enum values equal the strings persisted in the DB `status`/`role` columns

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Profile roles — ADMIN and SUPER_ADMIN may use /api/admin/*."""
    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


ADMIN_ROLES = frozenset({Role.ADMIN.value, Role.SUPER_ADMIN.value})


class PayoutStatus(str, Enum):
    """incoming_payments.customer_payout_status."""
    PENDING = "pending"
    INITIATED = "initiated"
    COMPLETED = "completed"
    FAILED = "failed"


class WithdrawalStatus(str, Enum):
    """Withdrawal lifecycle: pending -> processing -> completed | cancelled."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


DEFAULT_WITHDRAWAL_FILTER = "pending,processing"

# Statuses an admin may move a withdrawal into
ADMIN_WITHDRAWAL_TRANSITIONS = frozenset({
    WithdrawalStatus.PROCESSING.value,
    WithdrawalStatus.COMPLETED.value,
    WithdrawalStatus.CANCELLED.value,
})


class ClaimStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    COMPANY_REVIEW = "company_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    IN_COURT = "in_court"
    SETTLED = "settled"
    PAID = "paid"


class IncidentType(str, Enum):
    DELAY = "delay"
    NO_STOP = "no_stop"
    NO_ARRIVAL = "no_arrival"


class IncidentStatus(str, Enum):
    SUBMITTED = "submitted"
    VERIFIED = "verified"
    REJECTED = "rejected"
    CLAIMED = "claimed"


class Confidence(str, Enum):
    """How much the automatic verification trusts its own verdict."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def parse_status_filter(raw: str | None) -> list[str]:
    """Split a comma-separated status filter, dropping blanks.

    >>> parse_status_filter(" pending, ,completed")
    ['pending', 'completed']
    """
    value = raw if raw else DEFAULT_WITHDRAWAL_FILTER
    return [part.strip() for part in value.split(",") if part.strip()]
