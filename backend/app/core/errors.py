"""Error Hierarchy — typed, categorized exceptions for all CashBus API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; upstream/infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with CashBusError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"
    CONFLICT = "conflict"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    resource_id: str | None = None
    upstream_status: int | None = None
    user_message: str | None = None


class CashBusError(Exception):
    """Base exception for all CashBus API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.context.user_message or self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "context": {
                "resource_id": self.context.resource_id,
                "upstream_status": self.context.upstream_status,
            },
        }
        return {"error": body}


# ─── Client Errors (400-level) ──────────────────────────────────

class MissingFieldsError(CashBusError):
    """Required request fields absent or empty."""
    def __init__(self, fields: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Missing required fields: {', '.join(fields)}",
            "MISSING_FIELDS", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.fields = fields


class InvalidFieldError(CashBusError):
    """A request field is present but holds an unacceptable value."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_FIELD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class AuthenticationError(CashBusError):
    """Bearer token missing, malformed, or rejected by the identity service."""
    def __init__(self, message: str = "Unauthorized", context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(CashBusError):
    """Authenticated caller lacks the required role."""
    def __init__(self, message: str = "Forbidden", context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(CashBusError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class PayoutAlreadyCompletedError(CashBusError):
    """Customer payout for this payment was already confirmed."""
    def __init__(self, payment_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.resource_id = payment_id
        super().__init__(
            "Payout already completed",
            "PAYOUT_ALREADY_COMPLETED", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )


class PaymentAlreadyRecordedError(CashBusError):
    """Claim already has an incoming payment recorded."""
    def __init__(self, claim_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.resource_id = claim_id
        super().__init__(
            "Payment already recorded for this claim",
            "PAYMENT_ALREADY_RECORDED", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )


# ─── Infrastructure / Upstream Errors (500-level) ───────────────

class DatabaseError(CashBusError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class SettingsUpdateError(CashBusError):
    """One or more settings keys could not be stored."""
    def __init__(self, failures: list[str], context: ErrorContext | None = None):
        super().__init__(
            "; ".join(failures),
            "SETTINGS_UPDATE_FAILED", ErrorCategory.DATABASE,
            ErrorSeverity.ERROR, context, 500,
        )
        self.failures = failures


class IdentityServiceError(CashBusError):
    """Identity service unreachable or returned an unusable response."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Identity service error: {message}",
            "IDENTITY_SERVICE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )


class ProxyNotConfiguredError(CashBusError):
    """Static-IP proxy for the SIRI API is not configured."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Static IP proxy is not set up. Please configure SIRI_PROXY_URL.",
            "PROXY_NOT_CONFIGURED", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class SiriAPIError(CashBusError):
    """SIRI API answered with a non-success status."""
    def __init__(self, upstream_status: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.upstream_status = upstream_status
        super().__init__(
            "SIRI API request failed",
            "SIRI_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 502,
        )


class SiriTimeoutError(CashBusError):
    """SIRI API did not answer within the proxy timeout."""
    USER_MESSAGE = "שרת ה-SIRI לא הגיב בזמן. נסו שוב."

    def __init__(self, timeout_seconds: float, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_message = self.USER_MESSAGE
        super().__init__(
            f"SIRI API timeout after {timeout_seconds:g}s",
            "SIRI_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.ERROR, ctx, 504,
        )


class SiriProxyError(CashBusError):
    """Transport failure between us, the proxy, and the SIRI API."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"SIRI proxy failed: {message}",
            "SIRI_PROXY_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )


class StrideAPIError(CashBusError):
    """Stride real-time bus API call failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Stride API error: {message}",
            "STRIDE_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )


class NotificationError(CashBusError):
    """Notification delivery failed. Callers treat this as non-fatal."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Notification failed: {message}",
            "NOTIFICATION_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, context, 502,
        )
