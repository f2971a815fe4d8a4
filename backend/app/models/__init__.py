"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Profiles are keyed by the identity service's user id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from app.models.profile import Profile  # noqa: F401
from app.models.claim import Claim  # noqa: F401
from app.models.incoming_payment import IncomingPayment  # noqa: F401
from app.models.withdrawal_request import WithdrawalRequest  # noqa: F401
from app.models.app_setting import AppSetting  # noqa: F401
from app.models.incident import Incident  # noqa: F401
from app.models.gtfs_stop import GtfsStop  # noqa: F401
from app.models.execution_log import ExecutionLog  # noqa: F401
