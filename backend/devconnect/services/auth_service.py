"""Account services: password hashing, registration, login, token issuing.

Invariants:
    - Passwords are stored only as bcrypt hashes
    - Unknown email and wrong password produce the same InvalidCredentialsError
    - Avatar is the gravatar URL of the normalized email, fixed at registration
"""

import hashlib
import logging
from urllib.parse import urlencode

import bcrypt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.config import Settings
from devconnect.core.errors import (
    AlreadyExistsError,
    InvalidCredentialsError,
    ResourceNotFoundError,
)
from devconnect.core.tokens import create_access_token
from devconnect.models import User
from devconnect.schemas.user import UserCreate, UserLogin
from devconnect.services.persistence import parse_id

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Hash a plaintext password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a bcrypt hash."""
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


def gravatar_url(email: str, size: int = 200) -> str:
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": size, "r": "pg", "d": "mm"})
    return f"https://www.gravatar.com/avatar/{digest}?{query}"


def issue_token(user: User, settings: Settings) -> str:
    return create_access_token(
        str(user.id),
        settings.jwt_secret,
        settings.jwt_algorithm,
        settings.jwt_expires_seconds,
    )


async def _find_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def register_user(
    db: AsyncSession, body: UserCreate, settings: Settings,
) -> str:
    """Create an account and return a signed token for it."""
    email = body.email.lower()
    if await _find_by_email(db, email):
        raise AlreadyExistsError("User already exists")

    user = User(
        name=body.name,
        email=email,
        password=hash_password(body.password),
        avatar=gravatar_url(email),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise AlreadyExistsError("User already exists")
    logger.info("User registered", extra={"user_id": str(user.id)})
    return issue_token(user, settings)


async def authenticate(
    db: AsyncSession, body: UserLogin, settings: Settings,
) -> str:
    user = await _find_by_email(db, body.email)
    if not user or not verify_password(body.password, user.password):
        raise InvalidCredentialsError()
    return issue_token(user, settings)


async def get_user(db: AsyncSession, user_id: str) -> User:
    """Load the caller's account; a token may outlive its user."""
    user = await db.get(User, parse_id(user_id, "User"))
    if not user:
        raise ResourceNotFoundError("User", user_id)
    return user
