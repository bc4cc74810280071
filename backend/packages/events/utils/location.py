"""
Human readable location strings for event views.
"""

from typing import Union

from packages.events.models.domain.location import (
    HybridLocation,
    PhysicalDetails,
    PhysicalLocation,
    VirtualDetails,
    VirtualLocation,
)

PHYSICAL_UNAVAILABLE = "Physical location details not available"
VIRTUAL_UNAVAILABLE = "Virtual meeting details not available"


def format_physical(details: PhysicalDetails) -> str:
    parts = [
        part
        for part in (
            details.venue,
            details.address,
            details.city,
            details.state,
            details.country,
        )
        if part
    ]
    return ", ".join(parts) if parts else PHYSICAL_UNAVAILABLE


def format_virtual(details: VirtualDetails) -> str:
    if details.platform and details.meeting_url:
        return f"{details.platform} - {details.meeting_url}"
    if details.platform and details.meeting_id:
        return f"{details.platform} (ID: {details.meeting_id})"
    if details.platform or details.meeting_url:
        return details.platform or details.meeting_url
    return VIRTUAL_UNAVAILABLE


def format_location(
    location: Union[PhysicalLocation, VirtualLocation, HybridLocation],
) -> str:
    if isinstance(location, PhysicalLocation):
        return format_physical(location.physical)
    if isinstance(location, VirtualLocation):
        return format_virtual(location.virtual)

    physical = format_physical(location.physical)
    virtual = format_virtual(location.virtual)
    if physical == PHYSICAL_UNAVAILABLE:
        physical = "Physical location"
    if virtual == VIRTUAL_UNAVAILABLE:
        virtual = "Virtual access"
    return f"{physical} / {virtual}"
