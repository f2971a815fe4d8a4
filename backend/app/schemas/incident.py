"""Incident Verification Schemas.

Invariants:
    - Coordinates bounded to valid lat/lon ranges
    - incidentType defaults to no_arrival, incidentDatetime to "now" (filled in by the route)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.domain_types import IncidentType


class VerifyIncidentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    incident_id: UUID = Field(alias="incidentId")
    user_gps_lat: float = Field(alias="userGpsLat", ge=-90, le=90)
    user_gps_lng: float = Field(alias="userGpsLng", ge=-180, le=180)
    user_gps_accuracy: float | None = Field(None, alias="userGpsAccuracy", ge=0)
    bus_line: str = Field(alias="busLine", min_length=1, max_length=20)
    bus_company: str = Field(alias="busCompany", min_length=1, max_length=100)
    incident_type: IncidentType = Field(IncidentType.NO_ARRIVAL, alias="incidentType")
    incident_datetime: datetime | None = Field(None, alias="incidentDatetime")
