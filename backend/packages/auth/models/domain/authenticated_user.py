from pydantic import BaseModel, ConfigDict


class AuthenticatedUser(BaseModel):
    """Caller identity as asserted by the authenticating gateway"""

    user_id: int

    model_config = ConfigDict(from_attributes=True)
