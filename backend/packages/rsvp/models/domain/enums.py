"""
RSVP enums.

States seen by a user: no response, pending, accepted, declined. "No response"
has no row at all; it renders like pending.
"""

from enum import Enum
from typing import Optional


class ResponseStatus(str, Enum):
    ACCEPTED = "accepted"
    DECLINED = "declined"
    PENDING = "pending"

    @property
    def label(self) -> str:
        return {
            ResponseStatus.ACCEPTED: "Attending",
            ResponseStatus.DECLINED: "Not Attending",
            ResponseStatus.PENDING: "Pending Response",
        }[self]


class ColorCode(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    GREY = "grey"

    @property
    def hex(self) -> str:
        return {
            ColorCode.GREEN: "#28a745",
            ColorCode.YELLOW: "#ffc107",
            ColorCode.GREY: "#6c757d",
        }[self]


def color_code_for(status: Optional[ResponseStatus]) -> ColorCode:
    """Calendar color for a response status; no response renders grey."""
    if status == ResponseStatus.ACCEPTED:
        return ColorCode.GREEN
    if status == ResponseStatus.DECLINED:
        return ColorCode.YELLOW
    return ColorCode.GREY
