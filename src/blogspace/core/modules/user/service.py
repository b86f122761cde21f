from typing import Any
from uuid import UUID

import bcrypt
import structlog
from pymongo.asynchronous.database import AsyncDatabase

from blogspace.core.core import Service
from blogspace.core.modules.user.models import ProfileUpdate, User, UserRole
from blogspace.core.modules.user.validators import (
    normalize_email,
    validate_password,
    validate_profile_changes,
    validate_username,
)
from blogspace.errors import NotFoundError, ValidationError
from blogspace.utils import now

logger = structlog.get_logger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


class UserService(Service):
    """Manages users with in-memory cache."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")
        self._users: dict[UUID, User] = {}

    def get_user(self, user_id: UUID) -> User:
        """Get user by ID from cache."""
        if user_id not in self._users:
            raise NotFoundError(f"User '{user_id}' not found")
        return self._users[user_id]

    def get_user_by_email(self, email: str) -> User:
        email = email.strip().lower()
        user = next((u for u in self._users.values() if u.email == email), None)
        if user is None:
            raise NotFoundError(f"User with email '{email}' not found")
        return user

    def get_user_by_username(self, username: str) -> User:
        user = next((u for u in self._users.values() if u.username == username), None)
        if user is None:
            raise NotFoundError(f"User '{username}' not found")
        return user

    def find_user(self, user_id: UUID) -> User | None:
        """Get user by ID, or None when the account no longer exists."""
        return self._users.get(user_id)

    def has_user(self, user_id: UUID) -> bool:
        return user_id in self._users

    def has_email(self, email: str) -> bool:
        return any(user.email == email for user in self._users.values())

    def has_username(self, username: str) -> bool:
        return any(user.username == username for user in self._users.values())

    def get_all_users(self) -> list[User]:
        """Get all users, newest first."""
        return sorted(self._users.values(), key=lambda u: u.created_at, reverse=True)

    async def create_user(
        self, email: str, username: str, full_name: str, password: str, role: UserRole = UserRole.USER
    ) -> User:
        """Create user with hashed password."""
        email = normalize_email(email)
        validate_username(username)
        validate_password(password)
        if not full_name.strip():
            raise ValidationError("Full name is required")
        if self.has_email(email):
            raise ValidationError(f"User with email '{email}' already exists")
        if self.has_username(username):
            raise ValidationError(f"Username '{username}' is already taken")

        user = User(email=email, username=username, full_name=full_name.strip(), password_hash=hash_password(password), role=role)
        res = await self._collection.insert_one(user.to_mongo())
        logger.info("user_created", user_id=user.id, username=username, role=role)
        return await self.update_user_cache(res.inserted_id)

    def verify_password(self, email: str, password: str) -> bool:
        """Verify password against stored hash."""
        email = email.strip().lower()
        user = next((u for u in self._users.values() if u.email == email), None)
        if user is None:
            return False
        return bcrypt.checkpw(password.encode("utf-8"), user.password_hash.encode("utf-8"))

    async def change_password(self, user_id: UUID, old_password: str, new_password: str) -> None:
        """Change user password after verifying current password."""
        user = self.get_user(user_id)
        if not bcrypt.checkpw(old_password.encode("utf-8"), user.password_hash.encode("utf-8")):
            raise ValidationError("Invalid current password")

        validate_password(new_password)
        await self._collection.update_one(
            {"_id": user_id}, {"$set": {"password_hash": hash_password(new_password), "updated_at": now()}}
        )
        await self.update_user_cache(user_id)

    async def update_profile(self, user_id: UUID, update: ProfileUpdate) -> User:
        """Apply the explicitly set profile fields."""
        user = self.get_user(user_id)
        changes = update.model_dump(exclude_unset=True)

        validate_profile_changes(changes)
        username = changes.get("username")
        if username is not None and username != user.username and self.has_username(username):
            raise ValidationError(f"Username '{username}' is already taken")

        if not changes:
            return user
        changes["updated_at"] = now()
        await self._collection.update_one({"_id": user_id}, {"$set": changes})
        return await self.update_user_cache(user_id)

    async def delete_user(self, user_id: UUID) -> None:
        if not self.has_user(user_id):
            raise NotFoundError(f"User '{user_id}' not found")

        await self._collection.delete_one({"_id": user_id})
        del self._users[user_id]
        logger.info("user_deleted", user_id=user_id)

    async def ensure_admin_user_exists(self) -> None:
        """Create the bootstrap admin account if it does not exist yet."""
        config = self.core.config
        if not self.has_email(config.admin_email.lower()):
            await self.create_user(config.admin_email, "admin", "Administrator", config.admin_password, role=UserRole.ADMIN)

    async def update_all_users_cache(self) -> None:
        users = await User.list_cursor(self._collection.find())
        self._users = {user.id: user for user in users}

    async def update_user_cache(self, user_id: UUID) -> User:
        """Reload a specific user cache from database."""
        user = await self._collection.find_one({"_id": user_id})
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        self._users[user_id] = User.model_validate(user)
        return self._users[user_id]

    async def on_start(self) -> None:
        """Initialize indexes, cache, and admin user."""
        await self._collection.create_index([("email", 1)], unique=True)
        await self._collection.create_index([("username", 1)], unique=True)
        await self.update_all_users_cache()
        await self.ensure_admin_user_exists()
        logger.debug("user_service_started", user_count=len(self._users))
