"""Post services: create, read, delete posts and mutate their likes/comments.

Invariants:
    - Author name/avatar are copied from the User row at creation and never updated
    - Only the post's owner may delete it; only a comment's author may delete it
    - Likes/comments are mutated through core/mutation_policies.py and the whole
      post row is rewritten under its version check
"""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.core import mutation_policies as policies
from devconnect.core.errors import NotAuthorizedError, ResourceNotFoundError
from devconnect.models import Post
from devconnect.services.auth_service import get_user
from devconnect.services.persistence import commit_aggregate, parse_id

logger = logging.getLogger(__name__)


async def load_post(
    db: AsyncSession, post_id: str, missing_status: int = 404,
) -> Post:
    """Get post or raise ResourceNotFoundError with the route's status code."""
    post = await db.get(Post, parse_id(post_id, "Post", missing_status))
    if not post:
        raise ResourceNotFoundError("Post", post_id, http_status=missing_status)
    return post


async def create_post(db: AsyncSession, caller_id: str, text: str) -> Post:
    author = await get_user(db, caller_id)
    post = Post(
        user_id=author.id,
        text=text,
        name=author.name,
        avatar=author.avatar,
        likes=[],
        comments=[],
    )
    db.add(post)
    await db.commit()
    logger.info("Post created", extra={"user_id": caller_id, "post_id": str(post.id)})
    return post


async def list_posts(db: AsyncSession) -> list[Post]:
    result = await db.execute(select(Post).order_by(Post.date.desc()))
    return list(result.scalars().all())


async def get_post(db: AsyncSession, post_id: str) -> Post:
    return await load_post(db, post_id, missing_status=400)


async def delete_post(db: AsyncSession, caller_id: str, post_id: str) -> None:
    post = await load_post(db, post_id)
    if str(post.user_id) != caller_id:
        logger.warning(
            "Post delete refused: caller is not the owner",
            extra={"user_id": caller_id, "post_id": post_id},
        )
        raise NotAuthorizedError()
    await db.delete(post)
    await commit_aggregate(db, "Post")
    logger.info("Post deleted", extra={"user_id": caller_id, "post_id": post_id})


async def like_post(db: AsyncSession, caller_id: str, post_id: str) -> list[dict]:
    post = await load_post(db, post_id)
    post.likes = policies.add_like(post.likes, str(uuid.uuid4()), caller_id)
    await commit_aggregate(db, "Post")
    return post.likes


async def unlike_post(db: AsyncSession, caller_id: str, post_id: str) -> list[dict]:
    post = await load_post(db, post_id)
    post.likes = policies.remove_like(post.likes, caller_id)
    await commit_aggregate(db, "Post")
    return post.likes


async def add_comment(
    db: AsyncSession, caller_id: str, post_id: str, text: str,
) -> list[dict]:
    """Prepend a comment carrying a snapshot of the caller's name/avatar."""
    author = await get_user(db, caller_id)
    post = await load_post(db, post_id)
    comment = {
        "id": str(uuid.uuid4()),
        "user": caller_id,
        "text": text,
        "name": author.name,
        "avatar": author.avatar,
        "date": datetime.now(timezone.utc).isoformat(),
    }
    post.comments = policies.add_comment(post.comments, comment)
    await commit_aggregate(db, "Post")
    return post.comments


async def delete_comment(
    db: AsyncSession, caller_id: str, post_id: str, comment_id: str,
) -> list[dict]:
    post = await load_post(db, post_id)
    post.comments = policies.remove_comment(post.comments, comment_id, caller_id)
    await commit_aggregate(db, "Post")
    return post.comments
