import hashlib
import secrets
from typing import Annotated, Optional
from fastapi import HTTPException, status, Header

from common.core.config import settings
from common.core.telemetry import trace_span, get_logger
from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.auth.models.domain.service_account import ServiceAccount

logger = get_logger(__name__)


@trace_span
async def get_current_user(
    x_user_id: Annotated[Optional[str], Header()] = None,
) -> AuthenticatedUser:
    """
    Caller identity from the ``X-User-Id`` header.

    Authentication happens upstream at the identity provider; the gateway
    forwards the verified user id. Services never read identity any other way.
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-Id header missing",
        )

    try:
        user_id = int(x_user_id)
    except ValueError:
        user_id = 0
    if user_id <= 0:
        logger.warning(f"Rejected malformed X-User-Id header: {x_user_id!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-Id header invalid",
        )

    return AuthenticatedUser(user_id=user_id)


def _hash_api_key(api_key: str) -> str:
    return hashlib.sha256(api_key.encode()).hexdigest()


@trace_span
async def get_service_account(
    x_api_key: Annotated[Optional[str], Header()] = None,
) -> ServiceAccount:
    """Internal caller authenticated by ``X-Api-Key`` (no user identity)."""
    if not x_api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API key required",
        )

    configured = settings.service_api_key
    if not configured or not secrets.compare_digest(
        _hash_api_key(x_api_key), _hash_api_key(configured)
    ):
        logger.warning("Rejected service call with an invalid API key")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )

    return ServiceAccount(name=settings.service_account_name)
