"""Account Routes — HTTP surface for registration, profile read/update, and listing.

Invariants:
    - Dependency order per route: guards → validators → service
    - Handlers never touch the database; they call AccountService only
    - Every account in a response goes through public_view (no password)
    - Errors are raised, never turned into responses here (api/error_handlers.py)

Design Decisions:
    - No DELETE route: accounts are never removed through the API
    - GET /users is admin-only and paginated with skip/take (capped by settings)
"""

from fastapi import APIRouter, Depends, Query, status

from account_api.api.dependencies import get_account_service
from account_api.api.guards import require_admin, require_owner_or_admin
from account_api.api.validators import (
    validate_email, validate_password, validate_profile_update,
)
from account_api.config import Settings, get_settings
from account_api.core.account_view import public_view
from account_api.core.domain_types import AccountId
from account_api.services.account_service import AccountService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    email: str = Depends(validate_email),
    password: str = Depends(validate_password),
    profile: dict = Depends(validate_profile_update),
    service: AccountService = Depends(get_account_service),
):
    """Register a new account."""
    account = await service.register_account(email, password, profile)
    return {"message": "User created successfully", "user": public_view(account)}


@router.get("", dependencies=[Depends(require_admin)])
async def list_users(
    skip: int = Query(0, ge=0),
    take: int | None = Query(None, ge=1),
    settings: Settings = Depends(get_settings),
    service: AccountService = Depends(get_account_service),
):
    """List accounts, newest first. Admin only."""
    take = min(take or settings.default_page_size, settings.max_page_size)
    users = await service.list_accounts(skip=skip, take=take)
    return {"users": users, "pagination": {"skip": skip, "take": take}}


@router.get("/{account_id}")
async def get_user_profile(
    target: AccountId = Depends(require_owner_or_admin),
    service: AccountService = Depends(get_account_service),
):
    """Get one account's profile. Owner or admin."""
    return await service.get_profile(target)


@router.put("/{account_id}")
async def update_user_profile(
    target: AccountId = Depends(require_owner_or_admin),
    fields: dict = Depends(validate_profile_update),
    service: AccountService = Depends(get_account_service),
):
    """Update name/bio/age/phone. Owner or admin."""
    account = await service.update_profile(target, fields)
    return {"message": "Profile updated successfully", "user": public_view(account)}
