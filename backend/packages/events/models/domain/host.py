"""
Event host records, discriminated by ``host_type``.
"""

from typing import Annotated, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from packages.events.models.domain.enums import HostType


class HostCompanySnapshot(BaseModel):
    """Display cache of a participating company on a multi_corp host row."""

    id: int
    ticker: str
    name: str
    is_primary: bool = False
    sector: Optional[str] = None
    subsector: Optional[str] = None


class _HostBase(BaseModel):
    id: int
    event_id: int
    primary_company_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class SingleCorpHost(_HostBase):
    host_type: Literal["single_corp"] = "single_corp"
    host_id: int  # companies.id


class MultiCorpHost(_HostBase):
    host_type: Literal["multi_corp"] = "multi_corp"
    host_id: Optional[int] = None
    companies: List[HostCompanySnapshot] = Field(default_factory=list)

    def primary_snapshot(self) -> Optional[HostCompanySnapshot]:
        """The entry flagged primary, else the first entry."""
        for company in self.companies:
            if company.is_primary:
                return company
        return self.companies[0] if self.companies else None


class NonCompanyHost(_HostBase):
    host_type: Literal["non_company"] = "non_company"
    host_id: int  # organizations.id


EventHost = Annotated[
    Union[SingleCorpHost, MultiCorpHost, NonCompanyHost],
    Field(discriminator="host_type"),
]

event_host_adapter = TypeAdapter(EventHost)


class EventHostCreateModel(BaseModel):
    event_id: int
    host_type: HostType
    host_id: Optional[int] = None
    primary_company_id: Optional[int] = None
    companies_snapshot: Optional[List[HostCompanySnapshot]] = None

    model_config = ConfigDict(use_enum_values=True)

    @model_validator(mode="after")
    def check_host_reference(self) -> "EventHostCreateModel":
        if self.host_type != HostType.MULTI_CORP and self.host_id is None:
            raise ValueError(f"{self.host_type} host requires host_id")
        return self
