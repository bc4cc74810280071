from sqlalchemy import (
    Column,
    String,
    Text,
    DateTime,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.sql import func

from common.db.base import Base, BigIntegerType


class UserEventResponseEntity(Base):
    """A user's RSVP to an event. One row per (user, event)."""

    __tablename__ = "user_event_responses"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    user_id = Column(BigIntegerType, nullable=False, index=True)
    event_id = Column(
        BigIntegerType,
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    response_status = Column(String(50), nullable=False)  # accepted, declined, pending
    response_date = Column(DateTime, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_user_event_responses_pair"),
    )
