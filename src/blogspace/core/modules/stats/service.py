from typing import Any

from pymongo.asynchronous.database import AsyncDatabase

from blogspace.core.core import Service
from blogspace.core.modules.blog.models import BlogStatus
from blogspace.core.modules.stats.models import PlatformStats

RECENT_BLOGS_LIMIT = 5


class StatsService(Service):
    """Aggregated platform numbers for the admin dashboard."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._blogs = database.get_collection("blogs")

    async def get_platform_stats(self) -> PlatformStats:
        pipeline: list[dict[str, Any]] = [
            {
                "$group": {
                    "_id": None,
                    "total": {"$sum": 1},
                    "published": {"$sum": {"$cond": [{"$eq": ["$status", BlogStatus.PUBLISHED.value]}, 1, 0]}},
                    "drafts": {"$sum": {"$cond": [{"$eq": ["$status", BlogStatus.DRAFT.value]}, 1, 0]}},
                    "views": {"$sum": "$views"},
                    "likes": {"$sum": "$likes"},
                }
            }
        ]
        cursor = await self._blogs.aggregate(pipeline)
        totals = await cursor.to_list()
        row = totals[0] if totals else {}

        return PlatformStats(
            total_users=len(self.core.services.user.get_all_users()),
            total_blogs=row.get("total", 0),
            published_blogs=row.get("published", 0),
            draft_blogs=row.get("drafts", 0),
            total_views=row.get("views", 0),
            total_likes=row.get("likes", 0),
            recent_blogs=await self.core.services.blog.get_recent_blogs(RECENT_BLOGS_LIMIT),
        )
