# backend/bugtracker/core/permissions.py

from bugtracker.core.errors import AuthorizationError
from bugtracker.models.records import Account, Role


def require_role(actor: Account, *roles: Role) -> Account:
    """Raise AuthorizationError unless ``actor`` holds one of ``roles``."""
    if actor.role not in roles:
        allowed = ", ".join(r.value for r in roles)
        raise AuthorizationError(f"Role required: {allowed}")
    return actor
