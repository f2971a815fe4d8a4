"""Incident ORM — a panic-button report of a bus that was late or did not stop.

Invariants:
    - user_gps_lat/lng always present (reports without GPS are rejected upstream)
    - verification_data holds the last automatic or manual verification payload
    - status: submitted -> verified | rejected -> claimed
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import String, Text, Float, Boolean, DateTime, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class Incident(Base):
    __tablename__ = "incidents"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    bus_line: Mapped[str] = mapped_column(Text, nullable=False)
    bus_company: Mapped[str] = mapped_column(Text, nullable=False)
    station_name: Mapped[str] = mapped_column(Text, nullable=False, default="")
    user_gps_lat: Mapped[float] = mapped_column(Float, nullable=False)
    user_gps_lng: Mapped[float] = mapped_column(Float, nullable=False)
    incident_type: Mapped[str] = mapped_column(String(20), nullable=False)
    incident_datetime: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )

    verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    verification_data: Mapped[dict[str, Any] | None] = mapped_column(
        JSON, nullable=True,
    )
    verification_timestamp: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="submitted",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
