from fastapi import APIRouter, Depends

from app.dependencies import get_account_store, get_session_store, require_admin_account
from app.schemas.users import AccountOverview, AccountResponse
from app.services.sessions import SessionStore
from app.services.users import AccountStore

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/overview", response_model=AccountOverview)
def get_overview(
    _: AccountResponse = Depends(require_admin_account),
    accounts: AccountStore = Depends(get_account_store),
    sessions: SessionStore = Depends(get_session_store),
) -> AccountOverview:
    counts = accounts.role_counts()
    return AccountOverview(
        total_users=sum(counts.values()),
        learners=counts.get("learner", 0),
        mentors=counts.get("mentor", 0),
        admins=counts.get("admin", 0),
        recent_signups=accounts.recent_signup_count(days=30),
        active_sessions=sessions.count_active_sessions(),
    )


@router.post("/sessions/cleanup")
def cleanup_sessions(
    _: AccountResponse = Depends(require_admin_account),
    sessions: SessionStore = Depends(get_session_store),
) -> dict:
    return {"deleted": sessions.cleanup_expired_sessions()}
