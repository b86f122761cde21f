from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from blogspace.core.core import Service
from blogspace.core.modules.like.models import Like, LikeToggleResult

logger = structlog.get_logger(__name__)


class LikeService(Service):
    """Tracks which users like which blogs and keeps the blog counters in sync."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("likes")

    async def on_start(self) -> None:
        await self._collection.create_index([("user_id", 1), ("blog_id", 1)], unique=True)
        await self._collection.create_index([("blog_id", 1)])

    async def toggle_like(self, blog_id: UUID, user_id: UUID) -> LikeToggleResult:
        """Like the blog, or remove the like if the user already liked it."""
        result = await self._collection.delete_one({"blog_id": blog_id, "user_id": user_id})
        liked = result.deleted_count == 0
        if liked:
            try:
                await self._collection.insert_one(Like(blog_id=blog_id, user_id=user_id).to_mongo())
            except DuplicateKeyError:
                # A concurrent request inserted the same like first
                logger.debug("like_already_exists", blog_id=blog_id, user_id=user_id)

        # Blog.likes always mirrors the number of like documents
        like_count = await self._collection.count_documents({"blog_id": blog_id})
        await self.core.services.blog.set_like_count(blog_id, like_count)
        return LikeToggleResult(liked=liked, like_count=like_count)

    async def delete_likes_by_blog(self, blog_id: UUID) -> int:
        result = await self._collection.delete_many({"blog_id": blog_id})
        return result.deleted_count

