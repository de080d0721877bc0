"""Auth: login and current-user lookup.

Invariants:
    - POST /api/auth is public; GET /api/auth requires a valid token
    - The password hash never appears in a response
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.api.dependencies import get_current_user_id
from devconnect.config import Settings, get_settings
from devconnect.infrastructure.database import get_db
from devconnect.schemas.user import TokenResponse, UserLogin, UserResponse
from devconnect.services import auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("", response_model=UserResponse)
async def current_user(
    caller_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    user = await auth_service.get_user(db, caller_id)
    return UserResponse.from_model(user)


@router.post("", response_model=TokenResponse)
async def login(
    body: UserLogin,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Exchange email/password for a signed token."""
    token = await auth_service.authenticate(db, body, settings)
    return TokenResponse(token=token)
