"""Incident Verification — run and read GPS/real-time verification of incident reports.

Invariants:
    - Both endpoints require a bearer token (401 comes before any body error)
    - POST: missing required GPS/bus fields -> 400; unknown incident -> 404
    - POST persists the result before responding (databaseUpdated is True on 200)
    - GET without incidentId -> 400; unknown incident -> 404
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_user_id, get_incident_verifier, json_body
from app.core.errors import MissingFieldsError, ResourceNotFoundError
from app.core.verification_rules import IncidentReport
from app.infrastructure.database import get_db
from app.models.incident import Incident
from app.schemas.incident import VerifyIncidentRequest
from app.services.verification_service import IncidentVerifier

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/verify-incident", tags=["incidents"])


async def get_incident_or_404(incident_id: UUID, db: AsyncSession) -> Incident:
    incident = await db.get(Incident, incident_id)
    if not incident:
        raise ResourceNotFoundError("Incident", str(incident_id))
    return incident


@router.post("")
async def verify_incident(
    user_id: UUID = Depends(get_current_user_id),
    body: VerifyIncidentRequest = Depends(json_body(VerifyIncidentRequest)),
    db: AsyncSession = Depends(get_db),
    verifier: IncidentVerifier = Depends(get_incident_verifier),
):
    """Verify an incident against live bus positions and store the verdict."""
    incident = await get_incident_or_404(body.incident_id, db)
    report = IncidentReport(
        incident_id=str(body.incident_id),
        user_lat=body.user_gps_lat,
        user_lon=body.user_gps_lng,
        user_accuracy=body.user_gps_accuracy,
        bus_line=body.bus_line,
        bus_company=body.bus_company,
        incident_type=body.incident_type,
        incident_datetime=body.incident_datetime or datetime.now(timezone.utc),
    )
    result = await verifier.verify(report)
    await verifier.persist(incident, result)

    return {
        "success": True,
        "verified": result.is_verified,
        "verificationData": result.verification_data,
        "databaseUpdated": True,
    }


@router.get("")
async def get_verification_status(
    incident_id: UUID | None = Query(None, alias="incidentId"),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    if incident_id is None:
        raise MissingFieldsError(["incidentId"])
    incident = await get_incident_or_404(incident_id, db)
    return {
        "incidentId": str(incident_id),
        "verified": incident.verified,
        "verificationData": incident.verification_data,
        "verificationTimestamp": (
            incident.verification_timestamp.isoformat()
            if incident.verification_timestamp else None
        ),
        "status": incident.status,
    }
