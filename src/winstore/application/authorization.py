"""Role checks performed at the boundary, before a handler is invoked.

Handlers themselves never look at roles; the boundary decides which
caller may reach which use case.
"""

from __future__ import annotations

from enum import Enum

from winstore.domain.exceptions import AuthorizationError, ValidationError


class Role(Enum):
    USER = "user"
    VENDOR = "vendor"
    ADMIN = "admin"

    @classmethod
    def parse(cls, raw: str) -> Role:
        try:
            return cls(raw.strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown role '{raw}'")


def require_role(role: Role | str, *allowed: Role) -> Role:
    """Return the parsed role, or raise AuthorizationError if it is not allowed."""
    if isinstance(role, str):
        role = Role.parse(role)
    if role not in allowed:
        names = " or ".join(r.value for r in allowed)
        raise AuthorizationError(f"This action requires the {names} role")
    return role
