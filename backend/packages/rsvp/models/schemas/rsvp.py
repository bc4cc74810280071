from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from packages.rsvp.models.domain.enums import ColorCode, ResponseStatus, color_code_for


class RespondRequest(BaseModel):
    # Plain str so an unknown status reaches the service and gets its error code
    status: str
    notes: Optional[str] = Field(default=None, max_length=2000)


class ResponseView(BaseModel):
    id: int
    event_id: int
    response_status: ResponseStatus
    response_label: str
    response_date: datetime
    notes: Optional[str] = None
    color_code: ColorCode
    color_hex: str

    @classmethod
    def from_domain(cls, response) -> "ResponseView":
        status = ResponseStatus(response.response_status)
        color = color_code_for(status)
        return cls(
            id=response.id,
            event_id=response.event_id,
            response_status=status,
            response_label=status.label,
            response_date=response.response_date,
            notes=response.notes,
            color_code=color,
            color_hex=color.hex,
        )
