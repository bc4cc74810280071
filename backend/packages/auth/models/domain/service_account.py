from pydantic import BaseModel, ConfigDict


class ServiceAccount(BaseModel):
    """Internal caller (billing callbacks, event administration) identified by API key"""

    name: str

    model_config = ConfigDict(from_attributes=True)
