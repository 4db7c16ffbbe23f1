"""Auth Routes — credential check for existing accounts.

Invariants:
    - Unknown email and wrong password produce the same 401 body
    - The response never includes the password hash

Design Decisions:
    - No session or token is issued: callers identify themselves to the other
      routes with identity headers set by an upstream gateway
"""

from fastapi import APIRouter, Depends

from account_api.api.dependencies import get_account_service
from account_api.api.validators import require_password, validate_email
from account_api.services.account_service import AccountService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(
    email: str = Depends(validate_email),
    password: str = Depends(require_password),
    service: AccountService = Depends(get_account_service),
):
    user = await service.authenticate(email, password)
    return {"message": "Login successful", "user": user}
