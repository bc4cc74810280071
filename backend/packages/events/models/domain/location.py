"""
Event location payloads.

The ``location_details`` / ``virtual_details`` JSON columns are validated into
a union discriminated by ``location_type``. Keys the models do not know are
kept in the ``extra`` bag of the detail model they arrived on.
"""

from typing import Annotated, Any, Dict, Literal, Optional, Union
from pydantic import BaseModel, Field, TypeAdapter, model_validator


class _DetailsModel(BaseModel):
    extra: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def collect_unknown_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        known = set(cls.model_fields)
        extra = dict(data.get("extra") or {})
        extra.update({k: v for k, v in data.items() if k not in known})
        cleaned = {k: v for k, v in data.items() if k in known and k != "extra"}
        cleaned["extra"] = extra
        return cleaned

    def to_json(self) -> Dict[str, Any]:
        """Flat JSON for the store column (extra keys merged back in)."""
        return {**self.extra, **self.model_dump(exclude_none=True, exclude={"extra"})}


class Coordinates(BaseModel):
    latitude: float
    longitude: float


class PhysicalDetails(_DetailsModel):
    venue: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    accessibility_info: Optional[str] = None
    parking_info: Optional[str] = None


class VirtualDetails(_DetailsModel):
    platform: Optional[str] = None
    meeting_url: Optional[str] = None
    meeting_id: Optional[str] = None
    passcode: Optional[str] = None
    dial_in_number: Optional[str] = None


class PhysicalLocation(BaseModel):
    location_type: Literal["physical"] = "physical"
    physical: PhysicalDetails = Field(default_factory=PhysicalDetails)


class VirtualLocation(BaseModel):
    location_type: Literal["virtual"] = "virtual"
    virtual: VirtualDetails = Field(default_factory=VirtualDetails)


class HybridLocation(BaseModel):
    location_type: Literal["hybrid"] = "hybrid"
    physical: PhysicalDetails = Field(default_factory=PhysicalDetails)
    virtual: VirtualDetails = Field(default_factory=VirtualDetails)


EventLocation = Annotated[
    Union[PhysicalLocation, VirtualLocation, HybridLocation],
    Field(discriminator="location_type"),
]

_location_adapter = TypeAdapter(EventLocation)


def location_from_columns(
    location_type: str,
    location_details: Optional[Dict[str, Any]],
    virtual_details: Optional[Dict[str, Any]],
) -> Union[PhysicalLocation, VirtualLocation, HybridLocation]:
    """Build the tagged location from the three event columns.

    Raises pydantic.ValidationError for an unknown location_type or malformed details.
    """
    return _location_adapter.validate_python(
        {
            "location_type": location_type,
            "physical": location_details or {},
            "virtual": virtual_details or {},
        }
    )


def location_to_columns(
    location: Union[PhysicalLocation, VirtualLocation, HybridLocation],
) -> Dict[str, Any]:
    physical = getattr(location, "physical", None)
    virtual = getattr(location, "virtual", None)
    return {
        "location_type": location.location_type,
        "location_details": physical.to_json() if physical else None,
        "virtual_details": virtual.to_json() if virtual else None,
    }
