from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from blogspace.core.db import MongoModel
from blogspace.core.modules.user.models import UserView
from blogspace.utils import now


class Comment(MongoModel):
    """Comment on a blog, optionally replying to another comment of the same blog."""

    content: str
    blog_id: UUID
    author_id: UUID
    author: UserView | None = None  # Denormalized at read time, never stored
    parent_id: UUID | None = None  # None marks a root comment
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)

    def to_mongo(self, exclude: set[str] | None = None) -> dict[str, Any]:
        return super().to_mongo(exclude={"author"} | (exclude or set()))


class CommentNode(Comment):
    """Comment with its nested replies, built for rendering a thread."""

    replies: list["CommentNode"] = Field(default_factory=list)


class CreateComment(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000, description="The comment text")
    parent_id: UUID | None = Field(None, description="Comment being replied to")
