from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, computed_field

from blogspace.core.db import MongoModel
from blogspace.core.modules.user.models import UserView
from blogspace.core.pagination import PaginationResult
from blogspace.utils import now


class BlogStatus(StrEnum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Blog(MongoModel):
    """Blog post. `author` is denormalized at read time and never stored."""

    title: str
    content: str
    excerpt: str
    slug: str  # URL-friendly unique ID: /blogs/{slug}
    featured_image: str | None = None
    categories: list[str] = Field(default_factory=list)  # Category slugs
    tags: list[str] = Field(default_factory=list)
    author_id: UUID
    author: UserView | None = None
    status: BlogStatus = BlogStatus.DRAFT
    published_at: datetime | None = None  # Set the first time the blog is published
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)
    likes: int = 0
    views: int = 0
    read_time: int = 1  # Minutes

    @property
    def is_published(self) -> bool:
        return self.status == BlogStatus.PUBLISHED

    def to_mongo(self, exclude: set[str] | None = None) -> dict[str, Any]:
        return super().to_mongo(exclude={"author"} | (exclude or set()))


class BlogCreate(BaseModel):
    """Fields accepted when creating a blog."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    excerpt: str | None = Field(None, max_length=500, description="Generated from content when omitted")
    slug: str | None = Field(None, description="Generated from title when omitted")
    featured_image: str | None = None
    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    status: BlogStatus = BlogStatus.DRAFT


class BlogUpdate(BaseModel):
    """Partial blog update; only explicitly set fields are applied."""

    title: str | None = Field(None, min_length=1, max_length=200)
    content: str | None = Field(None, min_length=1)
    excerpt: str | None = Field(None, max_length=500)
    slug: str | None = None
    featured_image: str | None = None
    categories: list[str] | None = None
    tags: list[str] | None = None
    status: BlogStatus | None = None


class BlogPage(PaginationResult[Blog]):
    """A page of blogs together with the canonical query string of the view."""

    query: str = Field("", description="URL query string that reproduces this view")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def page(self) -> int:
        return super().page

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_pages(self) -> int:
        return super().total_pages
