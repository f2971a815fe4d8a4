"""Verification Rules — decide whether an incident report is confirmed by bus positions.

Invariants:
    - No vehicle of the line in range -> verified, HIGH confidence
    - Nearest vehicle farther than BUS_PRESENCE_RADIUS_METERS -> verified, HIGH
    - Bus present: no_stop / delay -> verified, MEDIUM; anything else -> verified, LOW
    - Automatic check failure -> verified, LOW (benefit of the doubt to the reporter)
    - verification_data is JSON-serializable (persisted to incidents.verification_data)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.core.domain_types import Confidence, IncidentType
from app.core.geo import operator_for_company, operator_name

STATION_RADIUS_METERS = 50
BUS_PRESENCE_RADIUS_METERS = 100
VEHICLE_SEARCH_RADIUS_KM = 1.0

REASON_NO_BUS = "לא נמצא אוטובוס בקו הנדרש באזור התחנה בזמן הדיווח"
REASON_BUS_FAR = "האוטובוס הקרוב ביותר היה במרחק {distance} מטר מהתחנה"
REASON_NO_STOP = "האוטובוס נצפה באזור אך לא עצר לפי דיווח המשתמש"
REASON_DELAY = "עיכוב בהגעת האוטובוס אושר על סמך נתוני מעקב"
REASON_GPS_ONLY = "אירוע אומת על סמך מיקום GPS של המדווח"
REASON_FALLBACK = "אימות אוטומטי נכשל - אושר על סמך דיווח המשתמש"


@dataclass
class IncidentReport:
    """Input to verification: where the reporter stood and which bus they waited for."""
    incident_id: str
    user_lat: float
    user_lon: float
    bus_line: str
    bus_company: str
    incident_type: IncidentType
    incident_datetime: datetime
    user_accuracy: float | None = None


@dataclass
class NearestStop:
    stop_id: str
    stop_name: str
    distance_meters: float


@dataclass
class VerificationResult:
    is_verified: bool
    verification_data: dict[str, Any] = field(default_factory=dict)

    @property
    def timestamp(self) -> str:
        return self.verification_data["timestamp"]


def decide(
    incident_type: IncidentType, nearest_vehicle_distance: float | None,
) -> tuple[bool, str, Confidence]:
    """Map the nearest-vehicle observation to (verified, reason, confidence)."""
    if nearest_vehicle_distance is None:
        return True, REASON_NO_BUS, Confidence.HIGH
    if nearest_vehicle_distance > BUS_PRESENCE_RADIUS_METERS:
        return (
            True,
            REASON_BUS_FAR.format(distance=round(nearest_vehicle_distance)),
            Confidence.HIGH,
        )
    if incident_type == IncidentType.NO_STOP:
        return True, REASON_NO_STOP, Confidence.MEDIUM
    if incident_type == IncidentType.DELAY:
        return True, REASON_DELAY, Confidence.MEDIUM
    return True, REASON_GPS_ONLY, Confidence.LOW


def _user_location(report: IncidentReport) -> dict[str, Any]:
    return {
        "lat": report.user_lat,
        "lon": report.user_lon,
        "accuracy": report.user_accuracy,
    }


def build_result(
    report: IncidentReport,
    started_at: datetime,
    vehicle_count: int,
    nearest_vehicle_distance: float | None,
    nearest_stop: NearestStop | None,
) -> VerificationResult:
    """Assemble the persisted verification payload from the raw observations."""
    verified, reason, confidence = decide(
        report.incident_type, nearest_vehicle_distance,
    )
    operator_ref = operator_for_company(report.bus_company)
    data: dict[str, Any] = {
        "timestamp": started_at.isoformat(),
        "userLocation": _user_location(report),
        "busData": {
            "found": nearest_vehicle_distance is not None,
            "nearestBusDistance": nearest_vehicle_distance,
            "vehicleLocations": vehicle_count,
            "checkTime": report.incident_datetime.isoformat(),
            "operatorRef": operator_ref,
            "operatorName": operator_name(operator_ref) if operator_ref else None,
        },
        "reason": reason,
        "confidence": confidence.value,
    }
    if nearest_stop:
        data["nearestStop"] = {
            "stopId": nearest_stop.stop_id,
            "stopName": nearest_stop.stop_name,
            "distance": nearest_stop.distance_meters,
        }
    return VerificationResult(is_verified=verified, verification_data=data)


def fallback_result(report: IncidentReport, started_at: datetime) -> VerificationResult:
    """Result used when the real-time lookup itself failed."""
    return VerificationResult(
        is_verified=True,
        verification_data={
            "timestamp": started_at.isoformat(),
            "userLocation": _user_location(report),
            "reason": REASON_FALLBACK,
            "confidence": Confidence.LOW.value,
        },
    )
