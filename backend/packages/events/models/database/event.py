from sqlalchemy import (
    Column,
    String,
    Text,
    DateTime,
    Boolean,
    ForeignKey,
    Index,
    UniqueConstraint,
)
from sqlalchemy.sql import func, true

from common.db.base import Base, BigIntegerType, JSONType


class EventEntity(Base):
    __tablename__ = "events"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    event_type = Column(
        String(50), nullable=False, default="standard", server_default="standard"
    )  # standard, catalyst

    location_type = Column(String(50), nullable=False)  # physical, virtual, hybrid
    location_details = Column(JSONType, nullable=True)  # venue, address, city, ...
    virtual_details = Column(JSONType, nullable=True)  # platform, meeting_url, ...
    weather_location = Column(String(255), nullable=True)

    # Soft delete: inactive events are never shown or answerable
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=true(), index=True
    )
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (Index("idx_events_active_dates", "is_active", "start_date"),)


class EventCompanyEntity(Base):
    """Junction between events and the companies they concern."""

    __tablename__ = "event_companies"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    event_id = Column(
        BigIntegerType,
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    company_id = Column(
        BigIntegerType,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("event_id", "company_id", name="uq_event_companies_pair"),
    )


class EventHostEntity(Base):
    __tablename__ = "event_hosts"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    event_id = Column(
        BigIntegerType,
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    host_type = Column(String(50), nullable=False)  # single_corp, multi_corp, non_company
    # companies.id for single_corp, organizations.id for non_company
    host_id = Column(BigIntegerType, nullable=True)
    primary_company_id = Column(BigIntegerType, nullable=True)
    # multi_corp only: [{id, ticker, name, is_primary}] display cache
    companies_snapshot = Column(JSONType, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
