"""Persistence helpers shared by services: id parsing and versioned commits.

Invariants:
    - A malformed id behaves exactly like an absent resource
    - A StaleDataError on commit rolls back and surfaces as ConcurrencyError (409)
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from devconnect.core.errors import ConcurrencyError, ResourceNotFoundError

logger = logging.getLogger(__name__)


def parse_id(raw: str, resource_type: str, http_status: int = 404) -> UUID:
    try:
        return UUID(str(raw))
    except ValueError:
        raise ResourceNotFoundError(resource_type, raw, http_status=http_status)


async def commit_aggregate(db: AsyncSession, resource_type: str) -> None:
    """Commit pending changes; a lost optimistic-lock race becomes a 409."""
    try:
        await db.commit()
    except (StaleDataError, IntegrityError) as e:
        await db.rollback()
        logger.warning(f"Concurrent write on {resource_type}: {e}")
        raise ConcurrencyError(
            f"{resource_type} was modified concurrently, retry the request",
        )
