from pydantic import BaseModel, Field

from blogspace.core.db import MongoModel


class Category(MongoModel):
    """Blog category. `post_count` is computed from published blogs on read."""

    name: str
    slug: str
    description: str | None = None
    color: str | None = None  # Hex color used for badges, e.g. #3b82f6
    post_count: int = 0


class CreateCategory(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    slug: str | None = Field(None, description="Generated from the name when omitted")
    description: str | None = Field(None, max_length=300)
    color: str | None = Field(None, pattern="^#[0-9a-fA-F]{6}$")


DEFAULT_CATEGORIES: list[CreateCategory] = [
    CreateCategory(name="Technology", description="Software, gadgets and the web", color="#3b82f6"),
    CreateCategory(name="Science", description="Research and discoveries", color="#10b981"),
    CreateCategory(name="Lifestyle", description="Everyday living, health and habits", color="#f59e0b"),
    CreateCategory(name="Travel", description="Places, journeys and guides", color="#ef4444"),
    CreateCategory(name="Business", description="Startups, careers and finance", color="#8b5cf6"),
]
