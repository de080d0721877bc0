"""Users: account registration."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.config import Settings, get_settings
from devconnect.infrastructure.database import get_db
from devconnect.schemas.user import TokenResponse, UserCreate
from devconnect.services import auth_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=TokenResponse)
async def register(
    body: UserCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Register a user and return a signed token."""
    token = await auth_service.register_user(db, body, settings)
    return TokenResponse(token=token)
