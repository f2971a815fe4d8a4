"""Stride Client — vehicle positions near a point."""

import httpx
import pytest

from app.core.errors import StrideAPIError
from app.infrastructure.stride_client import StrideClient


def _client(handler) -> StrideClient:
    return StrideClient(
        "https://stride.test/", transport=httpx.MockTransport(handler),
    )


async def test_sends_location_query():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=[{"lat": 32.08, "lon": 34.78}])

    vehicles = await _client(handler).vehicle_locations_near(
        32.08, 34.78, radius_km=1.0, line_ref="480", operator_ref=5,
    )
    assert vehicles == [{"lat": 32.08, "lon": 34.78}]
    assert seen["path"] == "/siri_vehicle_locations/list"
    assert seen["params"]["line_ref"] == "480"
    assert seen["params"]["operator_refs"] == "5"
    assert seen["params"]["radius_km"] == "1.0"
    assert seen["params"]["order_by"] == "recorded_at_time"


async def test_line_ref_omitted_when_absent():
    seen = {}

    def handler(request):
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=[])

    await _client(handler).vehicle_locations_near(32.08, 34.78)
    assert "line_ref" not in seen["params"]
    assert "operator_refs" not in seen["params"]


@pytest.mark.parametrize("response", [
    httpx.Response(500),
    httpx.Response(200, json={"detail": "oops"}),
    httpx.Response(200, text="<html>"),
])
async def test_bad_responses_raise(response):
    with pytest.raises(StrideAPIError):
        await _client(lambda request: response).vehicle_locations_near(32.08, 34.78)


async def test_timeout_raises():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(StrideAPIError):
        await _client(handler).vehicle_locations_near(32.08, 34.78)
