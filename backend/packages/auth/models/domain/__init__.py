from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.auth.models.domain.service_account import ServiceAccount

__all__ = ["AuthenticatedUser", "ServiceAccount"]
