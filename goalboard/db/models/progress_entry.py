"""ProgressEntry model: dated completion snapshot, the activity log behind streaks."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, Date, DateTime, Float, String, Uuid

from goalboard.db.base import Base
from goalboard.domain.streaks import utc_today


class ProgressEntry(Base):
    __tablename__ = "progress_entries"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    goal_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    # Always "macro": entries snapshot the macro goal named by goal_id
    kind = Column(String(10), nullable=False, default="macro")
    value = Column(Float, nullable=False)
    recorded_on = Column(Date, nullable=False, default=utc_today, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
