from fastapi import APIRouter, Depends

from app.dependencies import require_mentor_account
from app.schemas.users import AccountResponse

router = APIRouter(prefix="/mentor", tags=["mentor"])


@router.get("/me", response_model=AccountResponse)
def get_mentor(account: AccountResponse = Depends(require_mentor_account)) -> AccountResponse:
    return account
