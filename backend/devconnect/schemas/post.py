"""Post Schemas: text submissions and the post/like/comment response shapes.

Invariants:
    - PostText.text is stripped and non-empty (used for posts and comments)
    - Responses expose the owner id as "user", matching like/comment entries
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from devconnect.schemas.validators import require_text


class PostText(BaseModel):
    """Body of POST /api/posts and POST /api/posts/comment/{id}."""
    text: str = Field(max_length=10_000)

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return require_text(v)


class LikeResponse(BaseModel):
    id: str
    user: str


class CommentResponse(BaseModel):
    id: str
    user: str
    text: str
    name: str | None = None
    avatar: str | None = None
    date: datetime


class PostResponse(BaseModel):
    id: UUID
    user: UUID
    text: str
    name: str | None = None
    avatar: str | None = None
    likes: list[LikeResponse]
    comments: list[CommentResponse]
    date: datetime

    @classmethod
    def from_model(cls, post) -> "PostResponse":
        return cls(
            id=post.id,
            user=post.user_id,
            text=post.text,
            name=post.name,
            avatar=post.avatar,
            likes=post.likes,
            comments=post.comments,
            date=post.date,
        )


class MessageResponse(BaseModel):
    msg: str
