from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from blogspace.core.db import MongoModel
from blogspace.utils import now


class Like(MongoModel):
    """A user's like of a blog. Indexed on (user_id, blog_id) - unique."""

    user_id: UUID
    blog_id: UUID
    created_at: datetime = Field(default_factory=now)


class LikeToggleResult(BaseModel):
    liked: bool = Field(..., description="Whether the current user likes the blog after the toggle")
    like_count: int = Field(..., description="Total likes of the blog", ge=0)
