"""Profile Schemas: upsert payload, history entries, and the profile response.

Invariants:
    - ProfileUpsert requires non-empty status and skills; every other field optional
    - skills accepts a comma-separated string or a list of strings, and must
      yield at least one non-blank skill once split
    - "from"/"to" accept a date or a full ISO timestamp (time of day dropped)
    - History entries require their designated fields non-empty and a "from" date
    - "from" is a Python keyword: exposed via alias, stored under "from"

Design Decisions:
    - Sparse patch building lives in core/mutation_policies.py, not here:
      the schema only validates shape
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devconnect.core.mutation_policies import split_skills
from devconnect.schemas.validators import require_text


class ProfileUpsert(BaseModel):
    """Body of POST /api/profile."""
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str
    githubusername: str | None = None
    skills: str | list[str]
    youtube: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    instagram: str | None = None
    linkedin: str | None = None

    @field_validator("status")
    @classmethod
    def strip_status(cls, v: str) -> str:
        return require_text(v)

    @field_validator("skills")
    @classmethod
    def skills_not_empty(cls, v: str | list[str]) -> str | list[str]:
        if not split_skills(v):
            raise ValueError("skills cannot be empty")
        return v


class _HistoryEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_date: date = Field(alias="from")
    to: date | None = None
    current: bool = False
    description: str | None = None

    @field_validator("from_date", "to", mode="before")
    @classmethod
    def drop_time_of_day(cls, v):
        """Clients may send full ISO timestamps; only the calendar date is kept."""
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v

    def to_entry(self, entry_id: str) -> dict:
        """JSON-ready dict stored in the profile's sequence."""
        data = self.model_dump(mode="json", by_alias=True)
        return {"id": entry_id, **data}


class ExperienceCreate(_HistoryEntry):
    """Body of PUT /api/profile/experience."""
    title: str
    company: str
    location: str | None = None

    @field_validator("title", "company")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return require_text(v)


class EducationCreate(_HistoryEntry):
    """Body of PUT /api/profile/education."""
    school: str
    degree: str
    fieldofstudy: str

    @field_validator("school", "degree", "fieldofstudy")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return require_text(v)


class ProfileOwner(BaseModel):
    id: UUID
    name: str
    avatar: str | None = None


class ProfileResponse(BaseModel):
    id: UUID
    user: ProfileOwner
    company: str | None = None
    website: str | None = None
    location: str | None = None
    status: str
    skills: list[str]
    bio: str | None = None
    githubusername: str | None = None
    social: dict[str, str]
    experience: list[dict]
    education: list[dict]
    date: datetime

    @classmethod
    def from_model(cls, profile) -> "ProfileResponse":
        return cls(
            id=profile.id,
            user=ProfileOwner(
                id=profile.user.id,
                name=profile.user.name,
                avatar=profile.user.avatar,
            ),
            company=profile.company,
            website=profile.website,
            location=profile.location,
            status=profile.status,
            skills=profile.skills,
            bio=profile.bio,
            githubusername=profile.githubusername,
            social=profile.social,
            experience=profile.experience,
            education=profile.education,
            date=profile.date,
        )
