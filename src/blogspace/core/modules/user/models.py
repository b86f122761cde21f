from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field

from blogspace.core.db import MongoModel
from blogspace.utils import now


class UserRole(StrEnum):
    USER = "user"
    ADMIN = "admin"


class User(MongoModel):
    """User domain model with credentials."""

    email: str
    username: str
    full_name: str
    password_hash: str  # bcrypt hash
    role: UserRole = UserRole.USER
    avatar: str | None = None
    bio: str | None = None
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class UserView(BaseModel):
    """User account information (API representation)."""

    id: UUID = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    username: str = Field(..., description="Unique username")
    full_name: str = Field(..., description="Display name")
    role: UserRole = Field(..., description="Account role")
    avatar: str | None = Field(None, description="Avatar image URL")
    bio: str | None = Field(None, description="Short biography")
    created_at: datetime = Field(..., description="Registration timestamp")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(
            id=user.id,
            email=user.email,
            username=user.username,
            full_name=user.full_name,
            role=user.role,
            avatar=user.avatar,
            bio=user.bio,
            created_at=user.created_at,
        )


class ProfileUpdate(BaseModel):
    """Editable profile fields; unset fields are left unchanged."""

    username: str | None = None
    full_name: str | None = None
    avatar: str | None = None
    bio: str | None = None
