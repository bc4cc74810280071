from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class Company(BaseModel):
    id: int
    ticker: str
    name: str
    sector: str
    subsector: str
    industry: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CompanyCreateModel(BaseModel):
    """Model for creating a new company."""

    ticker: str
    name: str
    sector: str
    subsector: str
    industry: Optional[str] = None
    is_active: bool = True
