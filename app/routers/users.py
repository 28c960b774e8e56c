import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from app.config import Settings
from app.dependencies import (
    get_account_store,
    get_current_account,
    get_session_store,
    get_settings,
    require_admin_account,
    set_session_cookie,
)
from app.schemas.auth import MessageResponse
from app.schemas.users import (
    AccountResponse,
    AdminAccountUpdate,
    PasswordChangeRequest,
    ProfileUpdate,
)
from app.services.errors import NotFound
from app.services.sessions import SessionStore
from app.services.users import AccountStore

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=AccountResponse)
def get_me(account: AccountResponse = Depends(get_current_account)) -> AccountResponse:
    return account


@router.put("/me", response_model=AccountResponse)
def update_me(
    payload: ProfileUpdate,
    account: AccountResponse = Depends(get_current_account),
    accounts: AccountStore = Depends(get_account_store),
) -> AccountResponse:
    return accounts.update_profile(account.id, name=payload.name, email=payload.email)


@router.post("/me/password", response_model=MessageResponse)
def change_my_password(
    payload: PasswordChangeRequest,
    request: Request,
    response: Response,
    account: AccountResponse = Depends(get_current_account),
    accounts: AccountStore = Depends(get_account_store),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
) -> MessageResponse:
    changed = accounts.change_password(
        account.id, payload.current_password, payload.new_password
    )
    if not changed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )
    # every other device has to log in again with the new password
    revoked = sessions.revoke_all_sessions(account.id)
    LOGGER.info("Revoked %s sessions of account id=%s", revoked, account.id)
    token = sessions.create_session(account.id)
    set_session_cookie(response, request, settings, token)
    return MessageResponse(message="Password changed")


@router.get("", response_model=list[AccountResponse])
def list_users(
    _: AccountResponse = Depends(require_admin_account),
    accounts: AccountStore = Depends(get_account_store),
) -> list[AccountResponse]:
    return accounts.list_accounts()


@router.get("/{user_id}", response_model=AccountResponse)
def get_user(
    user_id: int,
    _: AccountResponse = Depends(require_admin_account),
    accounts: AccountStore = Depends(get_account_store),
) -> AccountResponse:
    account = accounts.get_account(user_id)
    if account is None:
        raise NotFound("User not found")
    return account


@router.put("/{user_id}", response_model=AccountResponse)
def update_user(
    user_id: int,
    payload: AdminAccountUpdate,
    admin: AccountResponse = Depends(require_admin_account),
    accounts: AccountStore = Depends(get_account_store),
) -> AccountResponse:
    LOGGER.info("Admin id=%s updating account id=%s", admin.id, user_id)
    return accounts.update_account(
        user_id, name=payload.name, email=payload.email, role=payload.role
    )


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    admin: AccountResponse = Depends(require_admin_account),
    accounts: AccountStore = Depends(get_account_store),
) -> MessageResponse:
    if user_id == admin.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot delete your own account",
        )
    accounts.delete_account(user_id)
    LOGGER.info("Admin id=%s deleted account id=%s", admin.id, user_id)
    return MessageResponse(message="User deleted successfully")
