from sqlalchemy import Column, String, Text, DateTime, Boolean
from sqlalchemy.sql import func, true

from common.db.base import Base, BigIntegerType


class OrganizationEntity(Base):
    """Non-company event host (regulator, trade association, ...)."""

    __tablename__ = "organizations"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    org_type = Column(String(50), nullable=False)
    sector = Column(String(100), nullable=True)
    subsector = Column(String(100), nullable=True)
    website = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
