from sqlalchemy import Column, String, DateTime, Boolean
from sqlalchemy.sql import func, true

from common.db.base import Base, BigIntegerType


class CompanyEntity(Base):
    __tablename__ = "companies"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    ticker = Column(String(20), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    sector = Column(String(100), nullable=False)
    # GICS subsector - the unit users subscribe to
    subsector = Column(String(100), nullable=False, index=True)
    industry = Column(String(100), nullable=True)

    # Retired companies stay referenced by past events
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=true(), index=True
    )
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
