import logging

from fastapi import APIRouter, Depends, Request, Response, status

from app.config import Settings
from app.dependencies import (
    clear_session_cookie,
    get_account_store,
    get_optional_account,
    get_session_store,
    get_session_token,
    get_settings,
    set_session_cookie,
)
from app.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    SessionResponse,
)
from app.schemas.users import AccountResponse
from app.services.errors import InvalidCredentials
from app.services.sessions import SessionStore
from app.services.users import AccountStore

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    request: Request,
    response: Response,
    accounts: AccountStore = Depends(get_account_store),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    account = accounts.register(
        payload.name, payload.email, payload.password, role=payload.role
    )
    token = sessions.create_session(account.id)
    set_session_cookie(response, request, settings, token)
    return AuthResponse(user=account)


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    accounts: AccountStore = Depends(get_account_store),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    account = accounts.verify_credentials(payload.email, payload.password)
    if account is None:
        LOGGER.warning("Failed login for email=%s", payload.email)
        raise InvalidCredentials()
    token = sessions.create_session(account.id)
    set_session_cookie(response, request, settings, token)
    LOGGER.info("Account id=%s logged in", account.id)
    return AuthResponse(user=account)


@router.post("/logout", response_model=MessageResponse)
def logout(
    request: Request,
    response: Response,
    token: str | None = Depends(get_session_token),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
) -> MessageResponse:
    if token:
        sessions.revoke_session(token)
    clear_session_cookie(response, request, settings)
    return MessageResponse(message="Logged out")


@router.get("/session", response_model=SessionResponse)
def read_session(
    request: Request,
    response: Response,
    token: str | None = Depends(get_session_token),
    account: AccountResponse | None = Depends(get_optional_account),
    settings: Settings = Depends(get_settings),
) -> SessionResponse:
    if account is None:
        if token:
            # expired, revoked or unknown token
            clear_session_cookie(response, request, settings)
        return SessionResponse(authenticated=False)
    return SessionResponse(authenticated=True, user=account)
