"""Profiles: own profile, upsert, public lookups, account deletion, history, GitHub repos.

Invariants:
    - GET /api/profile, GET /api/profile/user/{user_id} and
      GET /api/profile/github/{username} are public; everything else needs a token
    - Every profile response embeds the owner's name and avatar under "user"
"""

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.api.dependencies import get_current_user_id, get_github_client
from devconnect.infrastructure.database import get_db
from devconnect.infrastructure.github_client import GithubClient
from devconnect.schemas.post import MessageResponse
from devconnect.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    ProfileResponse,
    ProfileUpsert,
)
from devconnect.services import profile_service

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("/me", response_model=ProfileResponse)
async def my_profile(
    caller_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    profile = await profile_service.get_own_profile(db, caller_id)
    return ProfileResponse.from_model(profile)


@router.post("", response_model=ProfileResponse)
async def upsert_profile(
    body: ProfileUpsert,
    caller_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Create the caller's profile, or patch only the submitted fields."""
    profile = await profile_service.upsert_profile(db, caller_id, body)
    return ProfileResponse.from_model(profile)


@router.get("", response_model=list[ProfileResponse])
async def list_profiles(db: AsyncSession = Depends(get_db)):
    profiles = await profile_service.list_profiles(db)
    return [ProfileResponse.from_model(p) for p in profiles]


@router.get("/user/{user_id}", response_model=ProfileResponse)
async def profile_by_user(user_id: str, db: AsyncSession = Depends(get_db)):
    profile = await profile_service.get_profile_by_user(db, user_id)
    return ProfileResponse.from_model(profile)


@router.delete("", response_model=MessageResponse)
async def delete_account(
    caller_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Delete the caller's profile and user. Posts are kept."""
    await profile_service.delete_account(db, caller_id)
    return MessageResponse(msg="User deleted")


@router.put("/experience", response_model=ProfileResponse)
async def add_experience(
    body: ExperienceCreate,
    caller_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    profile = await profile_service.add_experience(db, caller_id, body)
    return ProfileResponse.from_model(profile)


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
async def delete_experience(
    exp_id: str,
    caller_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    profile = await profile_service.delete_experience(db, caller_id, exp_id)
    return ProfileResponse.from_model(profile)


@router.put("/education", response_model=ProfileResponse)
async def add_education(
    body: EducationCreate,
    caller_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    profile = await profile_service.add_education(db, caller_id, body)
    return ProfileResponse.from_model(profile)


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
async def delete_education(
    edu_id: str,
    caller_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    profile = await profile_service.delete_education(db, caller_id, edu_id)
    return ProfileResponse.from_model(profile)


@router.get("/github/{username}")
async def github_repos(
    username: str, github: GithubClient = Depends(get_github_client),
) -> Any:
    """Proxy the user's latest public GitHub repositories."""
    return await github.get_user_repos(username)
