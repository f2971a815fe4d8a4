"""GtfsStop ORM — static GTFS stop list, refreshed daily by an external import."""

import uuid

from sqlalchemy import Text, Float
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class GtfsStop(Base):
    __tablename__ = "gtfs_stops"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    stop_id: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    stop_code: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    stop_name: Mapped[str] = mapped_column(Text, nullable=False)
    stop_lat: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    stop_lon: Mapped[float] = mapped_column(Float, nullable=False, index=True)
