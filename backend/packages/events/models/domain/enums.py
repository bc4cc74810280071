"""
Event enums - value domains accepted at the store boundary.
"""

from enum import Enum


class LocationType(str, Enum):
    PHYSICAL = "physical"
    VIRTUAL = "virtual"
    HYBRID = "hybrid"

    def has_physical_component(self) -> bool:
        return self in (LocationType.PHYSICAL, LocationType.HYBRID)

    def has_virtual_component(self) -> bool:
        return self in (LocationType.VIRTUAL, LocationType.HYBRID)


class EventType(str, Enum):
    STANDARD = "standard"
    CATALYST = "catalyst"  # market-moving: earnings, FDA decisions, ...


class HostType(str, Enum):
    SINGLE_CORP = "single_corp"  # host_id -> companies
    MULTI_CORP = "multi_corp"  # companies snapshot embedded on the host row
    NON_COMPANY = "non_company"  # host_id -> organizations
