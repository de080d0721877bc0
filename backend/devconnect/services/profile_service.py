"""Profile services: upsert, lookups, account deletion, experience/education history.

Invariants:
    - At most one Profile per User (unique user_id; a create race surfaces as 409)
    - Upsert applies a sparse patch: fields not submitted keep their stored value
    - History entries are prepended with a fresh id and removed by that id
    - Account deletion removes the Profile and the User; the user's posts remain
"""

import logging
import uuid

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.core import mutation_policies as policies
from devconnect.core.errors import ResourceNotFoundError
from devconnect.models import Profile, User
from devconnect.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    ProfileUpsert,
)
from devconnect.services.auth_service import get_user
from devconnect.services.persistence import commit_aggregate, parse_id

logger = logging.getLogger(__name__)


async def find_profile(db: AsyncSession, user_id: uuid.UUID) -> Profile | None:
    result = await db.execute(select(Profile).where(Profile.user_id == user_id))
    return result.scalar_one_or_none()


async def _own_profile_or_404(db: AsyncSession, caller_id: str) -> Profile:
    profile = await find_profile(db, parse_id(caller_id, "Profile"))
    if not profile:
        raise ResourceNotFoundError("Profile", caller_id)
    return profile


async def get_own_profile(db: AsyncSession, caller_id: str) -> Profile:
    profile = await find_profile(db, parse_id(caller_id, "Profile", 400))
    if not profile:
        raise ResourceNotFoundError("Profile", caller_id, http_status=400)
    return profile


async def get_profile_by_user(db: AsyncSession, user_id: str) -> Profile:
    profile = await find_profile(db, parse_id(user_id, "Profile", 400))
    if not profile:
        raise ResourceNotFoundError("Profile", user_id, http_status=400)
    return profile


async def list_profiles(db: AsyncSession) -> list[Profile]:
    result = await db.execute(select(Profile).order_by(Profile.date.desc()))
    return list(result.scalars().all())


async def upsert_profile(
    db: AsyncSession, caller_id: str, body: ProfileUpsert,
) -> Profile:
    """Patch the caller's profile in place, or create it on first submission."""
    patch = policies.build_profile_patch(body.model_dump())
    social = patch.pop("social", {})
    profile = await find_profile(db, parse_id(caller_id, "User"))

    if profile:
        for name, value in patch.items():
            setattr(profile, name, value)
        if social:
            profile.social = policies.merge_social(profile.social, social)
        await commit_aggregate(db, "Profile")
        logger.info("Profile updated", extra={"user_id": caller_id})
        return profile

    owner = await get_user(db, caller_id)
    profile = Profile(
        user=owner, social=social, experience=[], education=[], **patch,
    )
    db.add(profile)
    await commit_aggregate(db, "Profile")
    logger.info("Profile created", extra={"user_id": caller_id})
    return profile


async def delete_account(db: AsyncSession, caller_id: str) -> None:
    user_id = parse_id(caller_id, "User")
    await db.execute(delete(Profile).where(Profile.user_id == user_id))
    await db.execute(delete(User).where(User.id == user_id))
    await db.commit()
    logger.info("Account deleted", extra={"user_id": caller_id})


async def add_experience(
    db: AsyncSession, caller_id: str, body: ExperienceCreate,
) -> Profile:
    profile = await _own_profile_or_404(db, caller_id)
    entry = body.to_entry(str(uuid.uuid4()))
    profile.experience = policies.add_entry(profile.experience, entry)
    await commit_aggregate(db, "Profile")
    return profile


async def delete_experience(
    db: AsyncSession, caller_id: str, entry_id: str,
) -> Profile:
    profile = await _own_profile_or_404(db, caller_id)
    profile.experience = policies.remove_entry(
        profile.experience, entry_id, "Experience",
    )
    await commit_aggregate(db, "Profile")
    return profile


async def add_education(
    db: AsyncSession, caller_id: str, body: EducationCreate,
) -> Profile:
    profile = await _own_profile_or_404(db, caller_id)
    entry = body.to_entry(str(uuid.uuid4()))
    profile.education = policies.add_entry(profile.education, entry)
    await commit_aggregate(db, "Profile")
    return profile


async def delete_education(
    db: AsyncSession, caller_id: str, entry_id: str,
) -> Profile:
    profile = await _own_profile_or_404(db, caller_id)
    profile.education = policies.remove_entry(
        profile.education, entry_id, "Education",
    )
    await commit_aggregate(db, "Profile")
    return profile
