from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast
from urllib.parse import urlparse

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from blogspace.config import Config


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that discovers and initializes services in dependency order."""

    from blogspace.core.modules.access.service import AccessService  # noqa: PLC0415
    from blogspace.core.modules.blog.service import BlogService  # noqa: PLC0415
    from blogspace.core.modules.category.service import CategoryService  # noqa: PLC0415
    from blogspace.core.modules.comment.service import CommentService  # noqa: PLC0415
    from blogspace.core.modules.like.service import LikeService  # noqa: PLC0415
    from blogspace.core.modules.session.service import SessionService  # noqa: PLC0415
    from blogspace.core.modules.stats.service import StatsService  # noqa: PLC0415
    from blogspace.core.modules.user.service import UserService  # noqa: PLC0415

    user: UserService
    session: SessionService
    access: AccessService
    category: CategoryService
    blog: BlogService
    comment: CommentService
    like: LikeService
    stats: StatsService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self._services: list[Service] = []

        # (attribute_name, module_path, class_name); users must warm up first
        service_configs = [
            ("user", "blogspace.core.modules.user.service", "UserService"),
            ("session", "blogspace.core.modules.session.service", "SessionService"),
            ("access", "blogspace.core.modules.access.service", "AccessService"),
            ("category", "blogspace.core.modules.category.service", "CategoryService"),
            ("blog", "blogspace.core.modules.blog.service", "BlogService"),
            ("comment", "blogspace.core.modules.comment.service", "CommentService"),
            ("like", "blogspace.core.modules.like.service", "LikeService"),
            ("stats", "blogspace.core.modules.stats.service", "StatsService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, database, and all service instances."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]]
    database: AsyncDatabase[dict[str, Any]]
    services: Services

    def __init__(self, config: Config) -> None:
        self.config = config
        self.mongo_client = AsyncMongoClient(config.database_url, uuidRepresentation="standard", tz_aware=True)
        self.database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
        self.services = Services(self.database)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close the MongoDB connection."""
        await self.services.stop_all()
        await self.mongo_client.aclose()
