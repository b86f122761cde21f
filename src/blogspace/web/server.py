from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from blogspace.app import App
from blogspace.config import Config
from blogspace.errors import UserError
from blogspace.web.error_handlers import general_exception_handler, user_error_handler
from blogspace.web.openapi import set_custom_openapi
from blogspace.web.routers import (
    admin_router,
    auth_router,
    blogs_router,
    categories_router,
    comments_router,
    profile_router,
)


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="Blogspace API",
        lifespan=lifespan,
    )

    app.add_middleware(SessionMiddleware, secret_key=config.session_secret_key)

    # CORS for the single-page frontend
    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(profile_router, prefix="/api/v1")
    app.include_router(blogs_router, prefix="/api/v1")
    app.include_router(comments_router, prefix="/api/v1")
    app.include_router(categories_router, prefix="/api/v1")
    app.include_router(admin_router, prefix="/api/v1")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
