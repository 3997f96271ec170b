"""MacroGoal model: top-level objective tracked by percentage or hours."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, Date, DateTime, Float, String, Text, Uuid

from goalboard.db.base import Base
from goalboard.domain.streaks import utc_today


class MacroGoal(Base):
    __tablename__ = "macro_goals"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    # "percentage" | "hours"
    type = Column(String(20), nullable=False, default="percentage")
    # Only meaningful for hours goals; null for percentage goals
    total_hours = Column(Float, nullable=True)
    icon = Column(String(64), nullable=False, default="")
    # Same day basis as ProgressEntry.recorded_on
    created_on = Column(Date, nullable=False, default=utc_today)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC)
    )
