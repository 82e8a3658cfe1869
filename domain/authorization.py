# ironpress/domain/authorization.py

from enum import Enum
from typing import Iterable, Optional

from domain.models import Principal, Role, Store


class Decision(str, Enum):
    ALLOW = "ALLOW"
    REDIRECT_LOGIN = "REDIRECT_LOGIN"
    REDIRECT_DEACTIVATED = "REDIRECT_DEACTIVATED"
    REDIRECT_DASHBOARD = "REDIRECT_DASHBOARD"


def store_blocks(principal: Principal, store: Optional[Store]) -> bool:
    """
    True when the principal is locked out because its store is deactivated.
    Super admins have no store and are never locked out.
    """
    if principal.role is Role.SUPER_ADMIN:
        return False
    if principal.role in (Role.ADMIN, Role.EMPLOYEE):
        return store is not None and store.is_active is False
    raise ValueError(f"Unhandled role: {principal.role!r}")


def authorize(
        principal: Optional[Principal],
        store: Optional[Store],
        required_roles: Iterable[Role] = (),
) -> Decision:
    """
    Decide whether `principal` may open a page guarded by `required_roles`.

    Rules are checked in order and the first match wins:
      1. nobody logged in            -> REDIRECT_LOGIN
      2. store deactivated           -> REDIRECT_DEACTIVATED (not for SUPER_ADMIN)
      3. role not in required_roles  -> REDIRECT_DASHBOARD (empty set allows any role)
      4. otherwise                   -> ALLOW

    Store activation can change between requests, so callers evaluate this on
    every navigation instead of caching the result.
    """
    if principal is None:
        return Decision.REDIRECT_LOGIN

    if store_blocks(principal, store):
        return Decision.REDIRECT_DEACTIVATED

    roles = frozenset(required_roles)
    if roles and principal.role not in roles:
        return Decision.REDIRECT_DASHBOARD

    return Decision.ALLOW
