"""Stride Client — real-time bus positions from the Open Bus Stride API.

Invariants:
    - Only vehicle locations are fetched (siri_vehicle_locations/list)
    - Any transport error, non-2xx, or non-list body -> StrideAPIError
    - Returned records keep the API's field names (lat, lon, recorded_at_time, ...)
"""

import logging
from typing import Any

import httpx

from app.core.errors import StrideAPIError

logger = logging.getLogger(__name__)

VEHICLE_LOCATIONS_PATH = "/siri_vehicle_locations/list"
USER_AGENT = "CashBus-Legal-Platform/1.0"


class StrideClient:
    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def vehicle_locations_near(
        self,
        lat: float,
        lon: float,
        radius_km: float = 0.5,
        line_ref: str | None = None,
        operator_ref: int | None = None,
        limit: int = 50,
    ) -> list[dict[str, Any]]:
        """Most recent vehicle positions around a point, newest first."""
        params: dict[str, str] = {
            "lat": str(lat),
            "lon": str(lon),
            "radius_km": str(radius_km),
            "limit": str(limit),
            "order": "desc",
            "order_by": "recorded_at_time",
        }
        if line_ref:
            params["line_ref"] = line_ref
        if operator_ref:
            params["operator_refs"] = str(operator_ref)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport,
            ) as client:
                response = await client.get(
                    f"{self.base_url}{VEHICLE_LOCATIONS_PATH}",
                    params=params,
                    headers={"Accept": "application/json", "User-Agent": USER_AGENT},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise StrideAPIError(f"status {e.response.status_code}")
        except (httpx.HTTPError, ValueError) as e:
            raise StrideAPIError(str(e) or type(e).__name__)

        if not isinstance(data, list):
            raise StrideAPIError("unexpected response shape")
        return data
