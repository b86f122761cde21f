from typing import Any
from uuid import UUID

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from blogspace import utils
from blogspace.core.core import Service
from blogspace.core.modules.blog.models import Blog, BlogCreate, BlogStatus, BlogUpdate
from blogspace.core.modules.blog.utils import estimate_read_time, make_excerpt, normalize_tags, slugify
from blogspace.core.modules.filter.models import BlogFilters
from blogspace.core.modules.filter.query_builder import build_blog_query, build_blog_sort
from blogspace.core.modules.user.models import User, UserView
from blogspace.core.pagination import PaginationResult
from blogspace.errors import NotFoundError, ValidationError
from blogspace.utils import now

logger = structlog.get_logger(__name__)


class BlogService(Service):
    """Manages blog posts, their publication state and listing queries."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("blogs")

    async def on_start(self) -> None:
        """Create indexes for slug lookup, listing and filtering."""
        await self._collection.create_index([("slug", 1)], unique=True)
        await self._collection.create_index([("author_id", 1)])
        await self._collection.create_index([("status", 1), ("created_at", -1)])
        await self._collection.create_index([("categories", 1)])
        await self._collection.create_index([("tags", 1)])

    async def get_blog(self, blog_id: UUID) -> Blog:
        doc = await self._collection.find_one({"_id": blog_id})
        if doc is None:
            raise NotFoundError(f"Blog '{blog_id}' not found")
        return self._with_author(Blog.model_validate(doc))

    async def get_blog_by_identifier(self, identifier: str) -> Blog:
        """Resolve a blog by ID or by slug."""
        try:
            query: dict[str, Any] = {"_id": UUID(identifier)}
        except ValueError:
            query = {"slug": identifier}
        doc = await self._collection.find_one(query)
        if doc is None:
            raise NotFoundError(f"Blog '{identifier}' not found")
        return self._with_author(Blog.model_validate(doc))

    async def increment_views(self, blog_id: UUID) -> Blog:
        doc = await self._collection.find_one_and_update(
            {"_id": blog_id}, {"$inc": {"views": 1}}, return_document=ReturnDocument.AFTER
        )
        if doc is None:
            raise NotFoundError(f"Blog '{blog_id}' not found")
        return self._with_author(Blog.model_validate(doc))

    async def create_blog(self, author_id: UUID, data: BlogCreate) -> Blog:
        """Create a blog, deriving slug, excerpt and reading time where not given."""
        slug = await self._unique_slug(data.slug or slugify(data.title))
        categories = self.core.services.category.validate_slugs(data.categories)
        timestamp = now()

        blog = Blog(
            title=data.title.strip(),
            content=data.content,
            excerpt=data.excerpt or make_excerpt(data.content),
            slug=slug,
            featured_image=data.featured_image,
            categories=categories,
            tags=normalize_tags(data.tags),
            author_id=author_id,
            status=data.status,
            published_at=timestamp if data.status == BlogStatus.PUBLISHED else None,
            created_at=timestamp,
            updated_at=timestamp,
            read_time=estimate_read_time(data.content),
        )
        await self._collection.insert_one(blog.to_mongo())
        logger.info("blog_created", blog_id=blog.id, slug=slug, status=blog.status)
        return self._with_author(blog)

    async def update_blog(self, blog_id: UUID, data: BlogUpdate) -> Blog:
        """Apply a partial update.

        Content changes refresh the reading time (and the excerpt unless one is
        given). `published_at` is stamped the first time a blog is published.
        """
        blog = await self.get_blog(blog_id)
        changes = data.model_dump(exclude_unset=True)
        update_doc: dict[str, Any] = {}

        if changes.get("title") is not None:
            update_doc["title"] = changes["title"].strip()
        if changes.get("slug") is not None and changes["slug"] != blog.slug:
            update_doc["slug"] = await self._unique_slug(changes["slug"], exclude_id=blog_id)
        if changes.get("content") is not None:
            update_doc["content"] = changes["content"]
            update_doc["read_time"] = estimate_read_time(changes["content"])
            if "excerpt" not in changes:
                update_doc["excerpt"] = make_excerpt(changes["content"])
        if "excerpt" in changes:
            update_doc["excerpt"] = changes["excerpt"] or make_excerpt(update_doc.get("content", blog.content))
        if "featured_image" in changes:
            update_doc["featured_image"] = changes["featured_image"]
        if changes.get("categories") is not None:
            update_doc["categories"] = self.core.services.category.validate_slugs(changes["categories"])
        if changes.get("tags") is not None:
            update_doc["tags"] = normalize_tags(changes["tags"])
        if changes.get("status") is not None:
            update_doc["status"] = changes["status"]
            if changes["status"] == BlogStatus.PUBLISHED and blog.published_at is None:
                update_doc["published_at"] = now()

        if not update_doc:
            return blog
        update_doc["updated_at"] = now()
        await self._collection.update_one({"_id": blog_id}, {"$set": update_doc})
        logger.debug("blog_updated", blog_id=blog_id, fields=sorted(update_doc))
        return await self.get_blog(blog_id)

    async def delete_blog(self, blog_id: UUID) -> None:
        """Delete a blog with its comments and likes."""
        result = await self._collection.delete_one({"_id": blog_id})
        if result.deleted_count == 0:
            raise NotFoundError(f"Blog '{blog_id}' not found")
        await self.core.services.comment.delete_comments_by_blog(blog_id)
        await self.core.services.like.delete_likes_by_blog(blog_id)
        logger.info("blog_deleted", blog_id=blog_id)

    async def delete_blogs_by_author(self, author_id: UUID) -> int:
        """Delete every blog of an author and return how many were removed."""
        ids = [doc["_id"] async for doc in self._collection.find({"author_id": author_id}, projection={"_id": 1})]
        for blog_id in ids:
            await self.delete_blog(blog_id)
        return len(ids)

    async def list_blogs(self, filters: BlogFilters, viewer: User | None = None) -> PaginationResult[Blog]:
        """Get a page of blogs matching the filters.

        Anyone but an admin only sees published blogs, unless they list their
        own blogs (author filter set to their own id).

        Args:
            filters: Filter, sort and pagination state
            viewer: The user asking, None for anonymous visitors

        Returns:
            Paginated list of blogs
        """
        query = build_blog_query(filters)
        own_blogs = viewer is not None and query.get("author_id") == viewer.id
        if not own_blogs and (viewer is None or not viewer.is_admin):
            query["status"] = BlogStatus.PUBLISHED.value
        sort_spec = build_blog_sort(filters)

        total = await self._collection.count_documents(query)
        cursor = self._collection.find(query).sort(sort_spec).skip(filters.offset).limit(filters.limit)
        items = [self._with_author(blog) for blog in await Blog.list_cursor(cursor)]

        logger.debug(
            "list_blogs",
            query=query,
            sort=sort_spec,
            total=total,
            limit=filters.limit,
            offset=filters.offset,
            returned=len(items),
        )
        return PaginationResult(items=items, total=total, limit=filters.limit, offset=filters.offset)

    async def get_recent_blogs(self, limit: int = 5) -> list[Blog]:
        cursor = self._collection.find().sort("created_at", -1).limit(limit)
        return [self._with_author(blog) for blog in await Blog.list_cursor(cursor)]

    async def count_published_by_category(self) -> dict[str, int]:
        """Number of published blogs per category slug."""
        pipeline: list[dict[str, Any]] = [
            {"$match": {"status": BlogStatus.PUBLISHED.value}},
            {"$unwind": "$categories"},
            {"$group": {"_id": "$categories", "count": {"$sum": 1}}},
        ]
        cursor = await self._collection.aggregate(pipeline)
        return {doc["_id"]: doc["count"] async for doc in cursor}

    async def remove_category_from_blogs(self, slug: str) -> int:
        result = await self._collection.update_many({"categories": slug}, {"$pull": {"categories": slug}})
        return result.modified_count

    async def set_like_count(self, blog_id: UUID, likes: int) -> None:
        await self._collection.update_one({"_id": blog_id}, {"$set": {"likes": likes}})

    async def _unique_slug(self, base: str, exclude_id: UUID | None = None) -> str:
        """Return `base` or `base-2`, `base-3`, ... whichever is not taken yet."""
        base = slugify(base)
        if not base or not utils.is_slug(base):
            raise ValidationError("Cannot derive a slug: title must contain letters or digits")

        slug, suffix = base, 1
        while True:
            query: dict[str, Any] = {"slug": slug}
            if exclude_id is not None:
                query["_id"] = {"$ne": exclude_id}
            if await self._collection.count_documents(query, limit=1) == 0:
                return slug
            suffix += 1
            slug = f"{base}-{suffix}"

    def _with_author(self, blog: Blog) -> Blog:
        author = self.core.services.user.find_user(blog.author_id)
        blog.author = UserView.from_domain(author) if author is not None else None
        return blog
