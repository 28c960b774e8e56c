from typing import Iterable

from app.schemas.users import AccountResponse
from app.services.errors import Forbidden, Unauthorized

ADMIN_ROLES = frozenset({"admin"})
MENTOR_ROLES = frozenset({"mentor", "admin"})


def require_account(account: AccountResponse | None) -> AccountResponse:
    if account is None:
        raise Unauthorized()
    return account


def require_role(
    account: AccountResponse | None, roles: str | Iterable[str]
) -> AccountResponse:
    allowed = {roles} if isinstance(roles, str) else set(roles)
    account = require_account(account)
    if account.role not in allowed:
        raise Forbidden()
    return account


def require_admin(account: AccountResponse | None) -> AccountResponse:
    return require_role(account, ADMIN_ROLES)


def require_mentor(account: AccountResponse | None) -> AccountResponse:
    return require_role(account, MENTOR_ROLES)
