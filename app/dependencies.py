from fastapi import Cookie, Depends, Request, Response

from app.config import SESSION_COOKIE_NAME, Settings
from app.schemas.users import AccountResponse
from app.services.roles import require_account, require_admin, require_mentor
from app.services.sessions import SessionStore
from app.services.users import AccountStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_account_store(request: Request) -> AccountStore:
    return request.app.state.account_store


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_session_token(
    session_token: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME),
) -> str | None:
    return session_token or None


def get_optional_account(
    token: str | None = Depends(get_session_token),
    sessions: SessionStore = Depends(get_session_store),
) -> AccountResponse | None:
    return sessions.resolve_session(token)


def get_current_account(
    account: AccountResponse | None = Depends(get_optional_account),
) -> AccountResponse:
    return require_account(account)


def require_admin_account(
    account: AccountResponse | None = Depends(get_optional_account),
) -> AccountResponse:
    return require_admin(account)


def require_mentor_account(
    account: AccountResponse | None = Depends(get_optional_account),
) -> AccountResponse:
    return require_mentor(account)


def set_session_cookie(
    response: Response, request: Request, settings: Settings, token: str
) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.session_max_age_seconds,
        path="/",
        httponly=True,
        secure=settings.cookie_secure or request.url.scheme == "https",
        samesite="lax",
    )


def clear_session_cookie(response: Response, request: Request, settings: Settings) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.cookie_secure or request.url.scheme == "https",
        samesite="lax",
    )
