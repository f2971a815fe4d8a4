"""Request Dependencies — bearer authentication, admin gating, and outbound client factories.

Invariants:
    - No Authorization header / non-Bearer scheme / rejected token -> 401
    - Authenticated but profile missing or role not admin/super_admin -> 403
    - Auth dependencies resolve before request bodies are read, so
      unauthenticated callers see 401/403 even with a malformed body
    - require_siri_client raises PROXY_NOT_CONFIGURED before the body is read
    - Empty, non-JSON or schema-invalid bodies -> RequestValidationError (400)

Design Decisions:
    - Clients built per request from cached Settings: trivially overridable in tests
      via app.dependency_overrides
    - Bodies are parsed by json_body() dependencies listed after the auth/proxy
      dependencies in each route signature. A plain body parameter would make
      FastAPI decode the JSON before any dependency runs.
"""

import json
import logging
from typing import Any
from uuid import UUID

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.domain_types import ADMIN_ROLES
from app.core.errors import (
    AuthenticationError, ErrorContext, ForbiddenError, ProxyNotConfiguredError,
)
from app.infrastructure.database import get_db
from app.infrastructure.identity_client import IdentityClient
from app.infrastructure.siri_client import SiriClient
from app.infrastructure.stride_client import StrideClient
from app.infrastructure.webhook_client import WebhookClient
from app.models.profile import Profile
from app.services.notifications import PayoutNotifier
from app.services.verification_service import IncidentVerifier

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


# ─── Outbound clients ───────────────────────────────────────────

def get_identity_client(
    settings: Settings = Depends(get_settings),
) -> IdentityClient:
    return IdentityClient(
        settings.identity_url,
        settings.identity_service_key,
        timeout_seconds=settings.identity_timeout_seconds,
    )


def get_stride_client(settings: Settings = Depends(get_settings)) -> StrideClient:
    return StrideClient(
        settings.stride_api_url, timeout_seconds=settings.stride_timeout_seconds,
    )


def get_webhook_client(
    settings: Settings = Depends(get_settings),
) -> WebhookClient | None:
    if not settings.notification_webhook_url:
        return None
    return WebhookClient(
        settings.notification_webhook_url,
        timeout_seconds=settings.notification_timeout_seconds,
    )


def require_siri_client(settings: Settings = Depends(get_settings)) -> SiriClient:
    if not settings.siri_proxy_url:
        logger.error("SIRI_PROXY_URL not configured")
        raise ProxyNotConfiguredError()
    return SiriClient(
        settings.siri_api_url,
        settings.siri_proxy_url,
        timeout_seconds=settings.siri_timeout_seconds,
    )


# ─── Services ───────────────────────────────────────────────────

def get_payout_notifier(
    db: AsyncSession = Depends(get_db),
    webhook: WebhookClient | None = Depends(get_webhook_client),
    settings: Settings = Depends(get_settings),
) -> PayoutNotifier:
    return PayoutNotifier(db, webhook, default_admin_email=settings.admin_email)


def get_incident_verifier(
    db: AsyncSession = Depends(get_db),
    stride: StrideClient = Depends(get_stride_client),
) -> IncidentVerifier:
    return IncidentVerifier(db, stride)


# ─── Request bodies ─────────────────────────────────────────────

def json_body(schema: Any):
    """Dependency that decodes the JSON body and validates it against `schema`.

    Errors use the same loc/type shape FastAPI produces for body parameters,
    so the validation handler reports them unchanged.
    """
    adapter = TypeAdapter(schema)

    async def parse(request: Request):
        raw = await request.body()
        if not raw.strip():
            raise RequestValidationError([{
                "type": "missing", "loc": ("body",), "msg": "Field required", "input": None,
            }])
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise RequestValidationError([{
                "type": "json_invalid",
                "loc": ("body", 0),
                "msg": "JSON decode error",
                "input": {},
                "ctx": {"error": str(e)},
            }])
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            raise RequestValidationError(
                [{**err, "loc": ("body", *err["loc"])} for err in e.errors(include_url=False)],
                body=data,
            )

    return parse


# ─── Auth ───────────────────────────────────────────────────────

async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    identity: IdentityClient = Depends(get_identity_client),
) -> UUID:
    """Resolve the bearer token to a user id or fail with 401."""
    if credentials is None or not credentials.credentials.strip():
        raise AuthenticationError()
    return await identity.get_user_id(credentials.credentials.strip())


async def require_admin(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> UUID:
    """Authenticated caller whose profile role is admin or super_admin."""
    profile = await db.get(Profile, user_id)
    if not profile or profile.role not in ADMIN_ROLES:
        logger.warning("Admin access denied", extra={"user_id": user_id})
        raise ForbiddenError(context=ErrorContext(user_id=str(user_id)))
    return user_id
