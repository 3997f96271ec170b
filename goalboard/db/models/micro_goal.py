"""MicroGoal model: sub-task of exactly one macro goal."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, String, Uuid

from goalboard.db.base import Base


class MicroGoal(Base):
    __tablename__ = "micro_goals"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    macro_goal_id = Column(Uuid(as_uuid=True), ForeignKey("macro_goals.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    completion = Column(Float, nullable=False, default=0)
    hours = Column(Float, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC)
    )
