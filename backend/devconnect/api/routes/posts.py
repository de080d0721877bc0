"""Posts: create/list/fetch/delete posts, like/unlike, comment/uncomment.

Invariants:
    - Every endpoint requires a valid token
    - Like/unlike return the post's likes; comment endpoints return its comments
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.api.dependencies import get_current_user_id
from devconnect.infrastructure.database import get_db
from devconnect.schemas.post import (
    CommentResponse,
    LikeResponse,
    MessageResponse,
    PostResponse,
    PostText,
)
from devconnect.services import post_service

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.post("", response_model=PostResponse)
async def create_post(
    body: PostText,
    caller_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    post = await post_service.create_post(db, caller_id, body.text)
    return PostResponse.from_model(post)


@router.get("", response_model=list[PostResponse])
async def list_posts(
    caller_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """All posts, newest first."""
    posts = await post_service.list_posts(db)
    return [PostResponse.from_model(p) for p in posts]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    caller_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    post = await post_service.get_post(db, post_id)
    return PostResponse.from_model(post)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    caller_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Owner-only delete."""
    await post_service.delete_post(db, caller_id, post_id)
    return MessageResponse(msg="Post removed")


@router.put("/like/{post_id}", response_model=list[LikeResponse])
async def like_post(
    post_id: str,
    caller_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await post_service.like_post(db, caller_id, post_id)


@router.put("/unlike/{post_id}", response_model=list[LikeResponse])
async def unlike_post(
    post_id: str,
    caller_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await post_service.unlike_post(db, caller_id, post_id)


@router.post("/comment/{post_id}", response_model=list[CommentResponse])
async def add_comment(
    post_id: str,
    body: PostText,
    caller_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await post_service.add_comment(db, caller_id, post_id, body.text)


@router.delete(
    "/comment/{post_id}/{comment_id}", response_model=list[CommentResponse],
)
async def delete_comment(
    post_id: str,
    comment_id: str,
    caller_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Author-only comment delete, matched by the comment's own id."""
    return await post_service.delete_comment(db, caller_id, post_id, comment_id)
