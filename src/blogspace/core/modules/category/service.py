from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from blogspace import utils
from blogspace.core.core import Service
from blogspace.core.modules.blog.utils import slugify
from blogspace.core.modules.category.models import DEFAULT_CATEGORIES, Category, CreateCategory
from blogspace.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class CategoryService(Service):
    """Manages blog categories with in-memory caching."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("categories")
        self._categories: dict[str, Category] = {}

    async def on_start(self) -> None:
        await self._collection.create_index([("slug", 1)], unique=True)
        await self.update_all_categories_cache()
        await self.ensure_default_categories()
        logger.debug("category_service_started", category_count=len(self._categories))

    async def update_all_categories_cache(self) -> None:
        categories = await Category.list_cursor(self._collection.find().sort("name", 1))
        self._categories = {category.slug: category for category in categories}

    def has_slug(self, slug: str) -> bool:
        return slug in self._categories

    def validate_slugs(self, slugs: list[str]) -> list[str]:
        """Ensure every category slug exists, returning them de-duplicated in order."""
        result: list[str] = []
        for slug in slugs:
            if not self.has_slug(slug):
                raise ValidationError(f"Category '{slug}' does not exist")
            if slug not in result:
                result.append(slug)
        return result

    async def get_all_categories(self) -> list[Category]:
        """Get all categories with post counts of published blogs."""
        counts = await self.core.services.blog.count_published_by_category()
        return [
            category.model_copy(update={"post_count": counts.get(category.slug, 0)}) for category in self._categories.values()
        ]

    async def get_category_by_slug(self, slug: str) -> Category:
        category = self._categories.get(slug)
        if category is None:
            raise NotFoundError(f"Category '{slug}' not found")
        counts = await self.core.services.blog.count_published_by_category()
        return category.model_copy(update={"post_count": counts.get(slug, 0)})

    async def create_category(self, data: CreateCategory) -> Category:
        slug = data.slug or slugify(data.name)
        if not utils.is_slug(slug):
            raise ValidationError(f"Invalid slug format: '{slug}'")
        if self.has_slug(slug):
            raise ValidationError(f"Category with slug '{slug}' already exists")

        category = Category(name=data.name, slug=slug, description=data.description, color=data.color)
        await self._collection.insert_one(category.to_mongo(exclude={"post_count"}))
        self._categories[slug] = category
        logger.info("category_created", slug=slug)
        return category

    async def delete_category(self, slug: str) -> None:
        """Delete a category and detach it from every blog."""
        if not self.has_slug(slug):
            raise NotFoundError(f"Category '{slug}' not found")
        await self._collection.delete_one({"slug": slug})
        del self._categories[slug]
        await self.core.services.blog.remove_category_from_blogs(slug)
        logger.info("category_deleted", slug=slug)

    async def ensure_default_categories(self) -> None:
        """Seed the default categories into an empty collection."""
        if self._categories:
            return
        for data in DEFAULT_CATEGORIES:
            await self.create_category(data)
