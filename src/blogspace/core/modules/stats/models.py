from pydantic import BaseModel, Field

from blogspace.core.modules.blog.models import Blog


class PlatformStats(BaseModel):
    """Admin dashboard overview."""

    total_users: int = Field(..., ge=0)
    total_blogs: int = Field(..., ge=0)
    published_blogs: int = Field(..., ge=0)
    draft_blogs: int = Field(..., ge=0)
    total_views: int = Field(..., ge=0)
    total_likes: int = Field(..., ge=0)
    recent_blogs: list[Blog] = Field(default_factory=list, description="Most recently created blogs")
