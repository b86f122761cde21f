from blogspace.web.routers.admin import router as admin_router
from blogspace.web.routers.auth import router as auth_router
from blogspace.web.routers.blogs import router as blogs_router
from blogspace.web.routers.categories import router as categories_router
from blogspace.web.routers.comments import router as comments_router
from blogspace.web.routers.profile import router as profile_router

__all__ = [
    "admin_router",
    "auth_router",
    "blogs_router",
    "categories_router",
    "comments_router",
    "profile_router",
]
