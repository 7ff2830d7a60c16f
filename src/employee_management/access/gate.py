"""Per-request access control.

The gate is stateless: each call looks only at the identity it is given and
the requirement of the target operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional

from ..core.enums import Role
from ..core.exceptions import AuthorizationError

LOGIN_ENDPOINT = "login"
HOME_ENDPOINT = "home"
DENIED_MESSAGE = "You do not have permission to access that page."


@dataclass(frozen=True)
class Identity:
    """The resolved current user, passed explicitly into operations."""

    account_id: int
    name: str
    email: str
    role: Role
    employee_id: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class Requirement(Enum):
    AUTHENTICATED = frozenset({Role.ADMIN, Role.EMPLOYEE})
    ADMIN = frozenset({Role.ADMIN})
    EMPLOYEE = frozenset({Role.EMPLOYEE})

    @property
    def roles(self) -> FrozenSet[Role]:
        return self.value


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    redirect_to: Optional[str] = None
    message: Optional[str] = None


ALLOW = AccessDecision(allowed=True)


def check_access(identity: Optional[Identity], requirement: Requirement) -> AccessDecision:
    if identity is None:
        return AccessDecision(allowed=False, redirect_to=LOGIN_ENDPOINT)
    if identity.role not in requirement.roles:
        return AccessDecision(allowed=False, redirect_to=HOME_ENDPOINT, message=DENIED_MESSAGE)
    return ALLOW


def ensure_role(identity: Optional[Identity], *roles: Role) -> Identity:
    """Service-side check; raises instead of redirecting."""
    if identity is None or identity.role not in roles:
        raise AuthorizationError(DENIED_MESSAGE)
    return identity
