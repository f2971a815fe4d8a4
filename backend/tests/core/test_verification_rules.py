"""Verification Rules — nearest-vehicle observation -> verdict.

Tests:
    - No vehicle / vehicle beyond 100 m -> HIGH
    - Vehicle present: no_stop and delay -> MEDIUM, no_arrival -> LOW
    - Every verdict is "verified"
    - Payload shape (busData, nearestStop) and fallback payload
"""

from datetime import datetime, timezone

import pytest

from app.core.domain_types import Confidence, IncidentType
from app.core.verification_rules import (
    REASON_FALLBACK, REASON_NO_BUS, IncidentReport, NearestStop,
    build_result, decide, fallback_result,
)

STARTED = datetime(2026, 10, 18, 8, 0, tzinfo=timezone.utc)


def _report(incident_type=IncidentType.NO_ARRIVAL) -> IncidentReport:
    return IncidentReport(
        incident_id="inc-1",
        user_lat=32.0853,
        user_lon=34.7818,
        bus_line="480",
        bus_company="egged",
        incident_type=incident_type,
        incident_datetime=datetime(2026, 10, 18, 7, 45, tzinfo=timezone.utc),
        user_accuracy=8.0,
    )


def test_no_vehicle_is_high_confidence():
    verified, reason, confidence = decide(IncidentType.DELAY, None)
    assert verified is True
    assert reason == REASON_NO_BUS
    assert confidence == Confidence.HIGH


def test_far_vehicle_is_high_confidence_with_distance_in_reason():
    verified, reason, confidence = decide(IncidentType.NO_ARRIVAL, 342.6)
    assert verified is True
    assert confidence == Confidence.HIGH
    assert "343" in reason


def test_boundary_distance_counts_as_present():
    _, _, confidence = decide(IncidentType.NO_ARRIVAL, 100.0)
    assert confidence == Confidence.LOW


@pytest.mark.parametrize("incident_type,expected", [
    (IncidentType.NO_STOP, Confidence.MEDIUM),
    (IncidentType.DELAY, Confidence.MEDIUM),
    (IncidentType.NO_ARRIVAL, Confidence.LOW),
])
def test_vehicle_present(incident_type, expected):
    verified, _, confidence = decide(incident_type, 35.0)
    assert verified is True
    assert confidence == expected


def test_build_result_payload():
    result = build_result(
        _report(), STARTED, vehicle_count=3, nearest_vehicle_distance=40.0,
        nearest_stop=NearestStop("21472", "ארלוזורוב", 12.0),
    )
    data = result.verification_data
    assert result.is_verified is True
    assert result.timestamp == STARTED.isoformat()
    assert data["userLocation"] == {"lat": 32.0853, "lon": 34.7818, "accuracy": 8.0}
    assert data["busData"] == {
        "found": True,
        "nearestBusDistance": 40.0,
        "vehicleLocations": 3,
        "checkTime": "2026-10-18T07:45:00+00:00",
        "operatorRef": 3,
        "operatorName": "אגד",
    }
    assert data["nearestStop"] == {"stopId": "21472", "stopName": "ארלוזורוב", "distance": 12.0}
    assert data["confidence"] == "low"


def test_build_result_without_stop_omits_key():
    result = build_result(_report(), STARTED, 0, None, None)
    assert "nearestStop" not in result.verification_data
    assert result.verification_data["busData"]["found"] is False


def test_fallback_result():
    result = fallback_result(_report(), STARTED)
    assert result.is_verified is True
    assert result.verification_data["confidence"] == "low"
    assert result.verification_data["reason"] == REASON_FALLBACK
    assert result.timestamp == STARTED.isoformat()


def test_unknown_company_has_no_operator():
    report = _report()
    report.bus_company = "private_shuttle"
    bus_data = build_result(report, STARTED, 0, None, None).verification_data["busData"]
    assert bus_data["operatorRef"] is None
    assert bus_data["operatorName"] is None
