"""Identity Client — resolves bearer tokens to user ids via the hosted auth service.

Invariants:
    - 2xx with an `id` field -> that id; 401/403/400 or a body without `id` -> AuthenticationError
    - Transport failures and 5xx -> IdentityServiceError (502), never 401
    - Token never logged

Design Decisions:
    - GoTrue-style endpoint (GET {identity_url}/auth/v1/user, apikey header): the hosted
      backend-as-a-service contract, kept as an injectable class so tests swap it out
"""

import logging
from uuid import UUID

import httpx

from app.core.errors import AuthenticationError, IdentityServiceError

logger = logging.getLogger(__name__)

USER_PATH = "/auth/v1/user"


class IdentityClient:
    """Thin async wrapper over the identity service's user lookup."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.service_key = service_key
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def get_user_id(self, token: str) -> UUID:
        """Return the user id the token belongs to."""
        headers = {
            "Authorization": f"Bearer {token}",
            "apikey": self.service_key,
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport,
            ) as client:
                response = await client.get(
                    f"{self.base_url}{USER_PATH}", headers=headers,
                )
        except httpx.HTTPError as e:
            logger.error(f"Identity service unreachable: {e}")
            raise IdentityServiceError(str(e) or type(e).__name__)

        if response.status_code >= 500:
            logger.error(
                "Identity service failed",
                extra={"upstream_status": response.status_code},
            )
            raise IdentityServiceError(f"status {response.status_code}")
        if response.status_code != 200:
            raise AuthenticationError()

        try:
            user_id = response.json().get("id")
            return UUID(str(user_id))
        except (ValueError, AttributeError, TypeError):
            raise AuthenticationError()
