from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict


class OrganizationType(str, Enum):
    GOVERNMENT = "government"
    ASSOCIATION = "association"
    NONPROFIT = "nonprofit"
    PRIVATE_COMPANY = "private_company"
    INTERNATIONAL = "international"


class Organization(BaseModel):
    id: int
    name: str
    org_type: OrganizationType
    sector: Optional[str] = None
    subsector: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class OrganizationCreateModel(BaseModel):
    name: str
    org_type: OrganizationType
    sector: Optional[str] = None
    subsector: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)
