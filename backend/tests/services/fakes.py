"""Fakes for the outbound services the routes depend on.

Tokens map to fixed user ids; seeded profiles use the same ids
(see conftest.seed_profiles).
"""

import uuid

from app.core.errors import AuthenticationError, StrideAPIError

ADMIN_ID = uuid.UUID("00000000-0000-0000-0000-00000000a001")
SUPER_ADMIN_ID = uuid.UUID("00000000-0000-0000-0000-00000000a002")
USER_ID = uuid.UUID("00000000-0000-0000-0000-00000000b001")
GHOST_ID = uuid.UUID("00000000-0000-0000-0000-00000000c001")

TOKENS = {
    "admin-token": ADMIN_ID,
    "super-admin-token": SUPER_ADMIN_ID,
    "user-token": USER_ID,
    "ghost-token": GHOST_ID,
}


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


ADMIN = bearer("admin-token")
SUPER_ADMIN = bearer("super-admin-token")
USER = bearer("user-token")
GHOST = bearer("ghost-token")


class FakeIdentityClient:
    """Resolves the fixed TOKENS table; anything else is rejected."""

    async def get_user_id(self, token: str) -> uuid.UUID:
        if token not in TOKENS:
            raise AuthenticationError()
        return TOKENS[token]


class FakeStride:
    """Stands in for StrideClient; tests set .vehicles or .error."""

    def __init__(self):
        self.vehicles: list[dict] = []
        self.error: str | None = None
        self.calls: list[dict] = []

    async def vehicle_locations_near(
        self, lat, lon, radius_km=0.5, line_ref=None, operator_ref=None, limit=50,
    ):
        self.calls.append({
            "lat": lat, "lon": lon, "radius_km": radius_km,
            "line_ref": line_ref, "operator_ref": operator_ref,
        })
        if self.error:
            raise StrideAPIError(self.error)
        return self.vehicles
