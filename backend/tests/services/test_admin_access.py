"""Admin Access — every /api/admin/* endpoint is gated on bearer auth and role.

Invariants:
    - No token / unknown token -> 401 UNAUTHORIZED
    - Authenticated non-admin, or no profile at all -> 403 FORBIDDEN
    - Auth is decided before the body is read (empty or malformed JSON bodies still get 401/403)
    - admin and super_admin are both accepted
"""

from uuid import uuid4

import pytest

from tests.services.fakes import ADMIN, GHOST, SUPER_ADMIN, USER, bearer

ADMIN_ENDPOINTS = [
    ("POST", "/api/admin/confirm-payout", {}),
    ("POST", "/api/admin/record-payment", {}),
    ("GET", "/api/admin/settings", None),
    ("PUT", "/api/admin/settings", []),
    ("GET", "/api/admin/withdrawals", None),
    ("PATCH", f"/api/admin/withdrawals/{uuid4()}", {}),
]
BODY_ENDPOINTS = [(method, path) for method, path, body in ADMIN_ENDPOINTS if body is not None]
MALFORMED_JSON = b"{not json"


async def _call(client, method, path, body, headers=None):
    if body is None:
        return await client.request(method, path, headers=headers)
    return await client.request(method, path, json=body, headers=headers)


@pytest.mark.parametrize("method,path,body", ADMIN_ENDPOINTS)
async def test_missing_token_returns_401(client, method, path, body):
    res = await _call(client, method, path, body)
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.parametrize("method,path,body", ADMIN_ENDPOINTS)
async def test_rejected_token_returns_401(client, method, path, body):
    res = await _call(client, method, path, body, bearer("expired-token"))
    assert res.status_code == 401


@pytest.mark.parametrize("method,path,body", ADMIN_ENDPOINTS)
async def test_regular_user_returns_403(client, method, path, body):
    res = await _call(client, method, path, body, USER)
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.parametrize("method,path,body", ADMIN_ENDPOINTS)
async def test_user_without_profile_returns_403(client, method, path, body):
    res = await _call(client, method, path, body, GHOST)
    assert res.status_code == 403


async def _send_malformed(client, method, path, headers=None):
    return await client.request(
        method, path, content=MALFORMED_JSON,
        headers={"Content-Type": "application/json", **(headers or {})},
    )


@pytest.mark.parametrize("method,path", BODY_ENDPOINTS)
async def test_malformed_json_without_token_returns_401(client, method, path):
    res = await _send_malformed(client, method, path)
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.parametrize("method,path", BODY_ENDPOINTS)
async def test_malformed_json_from_regular_user_returns_403(client, method, path):
    res = await _send_malformed(client, method, path, USER)
    assert res.status_code == 403


@pytest.mark.parametrize("method,path", BODY_ENDPOINTS)
async def test_malformed_json_from_admin_returns_400(client, method, path):
    res = await _send_malformed(client, method, path, ADMIN)
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["type"] == "json_invalid"


async def test_non_bearer_scheme_returns_401(client):
    res = await client.get(
        "/api/admin/settings", headers={"Authorization": "Basic YWRtaW46YWRtaW4="},
    )
    assert res.status_code == 401


async def test_admin_and_super_admin_are_accepted(client):
    for headers in (ADMIN, SUPER_ADMIN):
        res = await client.get("/api/admin/settings", headers=headers)
        assert res.status_code == 200


async def test_error_envelope_shape(client):
    res = await client.get("/api/admin/withdrawals")
    error = res.json()["error"]
    assert set(error) >= {"code", "message", "category", "severity", "timestamp"}
    assert error["category"] == "authentication"
