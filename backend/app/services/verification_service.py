"""Incident Verification — compares the reporter's GPS with live bus positions.

Invariants:
    - verify() never raises for upstream (Stride) failures: it returns the LOW-confidence fallback
    - Nearest stop search radius is 2 x STATION_RADIUS_METERS around the reporter
    - persist() writes verified, verification_data, verification_timestamp and status together

Design Decisions:
    - Decision rules live in core/verification_rules.py; this module only gathers observations
    - Nearest stop: bounding-box prefilter in SQL, exact haversine ranking in Python
      (portable across PostgreSQL and the SQLite test database)
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import IncidentStatus
from app.core.errors import StrideAPIError
from app.core.geo import bounding_box, haversine_meters, operator_for_company
from app.core.verification_rules import (
    STATION_RADIUS_METERS,
    VEHICLE_SEARCH_RADIUS_KM,
    IncidentReport,
    NearestStop,
    VerificationResult,
    build_result,
    fallback_result,
)
from app.infrastructure.stride_client import StrideClient
from app.models.gtfs_stop import GtfsStop
from app.models.incident import Incident

logger = logging.getLogger(__name__)


class IncidentVerifier:
    def __init__(self, db: AsyncSession, stride: StrideClient):
        self.db = db
        self.stride = stride

    async def find_nearest_stop(
        self, lat: float, lon: float, radius_meters: float,
    ) -> NearestStop | None:
        min_lat, max_lat, min_lon, max_lon = bounding_box(lat, lon, radius_meters)
        result = await self.db.execute(
            select(GtfsStop)
            .where(GtfsStop.stop_lat.between(min_lat, max_lat))
            .where(GtfsStop.stop_lon.between(min_lon, max_lon)),
        )
        best: NearestStop | None = None
        for stop in result.scalars():
            distance = haversine_meters(lat, lon, stop.stop_lat, stop.stop_lon)
            if distance > radius_meters:
                continue
            if best is None or distance < best.distance_meters:
                best = NearestStop(stop.stop_id, stop.stop_name, distance)
        return best

    async def verify(
        self, report: IncidentReport, now: datetime | None = None,
    ) -> VerificationResult:
        started_at = now or datetime.now(timezone.utc)
        nearest_stop = await self.find_nearest_stop(
            report.user_lat, report.user_lon, STATION_RADIUS_METERS * 2,
        )

        try:
            vehicles = await self.stride.vehicle_locations_near(
                report.user_lat,
                report.user_lon,
                radius_km=VEHICLE_SEARCH_RADIUS_KM,
                line_ref=report.bus_line,
                operator_ref=operator_for_company(report.bus_company),
            )
        except StrideAPIError as e:
            logger.warning(
                f"Real-time lookup failed, using fallback verdict: {e.message}",
                extra={"incident_id": report.incident_id},
            )
            return fallback_result(report, started_at)

        nearest_distance: float | None = None
        for vehicle in vehicles:
            try:
                distance = haversine_meters(
                    report.user_lat, report.user_lon,
                    float(vehicle["lat"]), float(vehicle["lon"]),
                )
            except (KeyError, TypeError, ValueError):
                continue
            if nearest_distance is None or distance < nearest_distance:
                nearest_distance = distance

        return build_result(
            report, started_at, len(vehicles), nearest_distance, nearest_stop,
        )

    async def persist(self, incident: Incident, result: VerificationResult) -> None:
        now = datetime.now(timezone.utc)
        incident.verified = result.is_verified
        incident.verification_data = result.verification_data
        incident.verification_timestamp = datetime.fromisoformat(result.timestamp)
        incident.status = (
            IncidentStatus.VERIFIED.value if result.is_verified
            else IncidentStatus.SUBMITTED.value
        )
        incident.updated_at = now
        await self.db.commit()
        logger.info(
            f"Incident verification stored: verified={result.is_verified}",
            extra={"incident_id": incident.id},
        )
