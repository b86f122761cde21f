from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from uuid import UUID

from pydantic import BaseModel, Field

from blogspace.config import Config
from blogspace.core.core import Core
from blogspace.core.modules.blog.models import Blog, BlogCreate, BlogPage, BlogUpdate
from blogspace.core.modules.category.models import Category, CreateCategory
from blogspace.core.modules.comment.models import Comment, CommentNode
from blogspace.core.modules.filter.state import BlogListFilterState, FilterState, SearchFilterState
from blogspace.core.modules.like.models import LikeToggleResult
from blogspace.core.modules.session.models import AuthToken
from blogspace.core.modules.stats.models import PlatformStats
from blogspace.core.modules.user.models import ProfileUpdate, User, UserView
from blogspace.core.modules.user.validators import validate_password_confirmation
from blogspace.errors import AccessDeniedError, AuthenticationError, NotFoundError, ValidationError


class AuthResult(BaseModel):
    """Authenticated user together with a fresh session token."""

    user: UserView = Field(..., description="The authenticated user")
    token: str = Field(..., description="Authentication token for subsequent requests")


class App:
    """Facade for all application operations, validates permissions before delegating to Core."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def is_auth_token_valid(self, auth_token: AuthToken) -> bool:
        return await self._core.services.session.is_auth_token_valid(auth_token)

    # === Authentication and profile ===
    async def register(self, email: str, username: str, full_name: str, password: str, confirm_password: str) -> AuthResult:
        """Create an account and sign the new user in."""
        validate_password_confirmation(password, confirm_password)
        user = await self._core.services.user.create_user(email, username, full_name, password)
        token = await self._core.services.session.create_session(user.id)
        return AuthResult(user=UserView.from_domain(user), token=token)

    async def login(self, email: str, password: str) -> AuthResult:
        if not self._core.services.user.verify_password(email, password):
            raise AuthenticationError("Invalid email or password")
        user = self._core.services.user.get_user_by_email(email)
        token = await self._core.services.session.create_session(user.id)
        return AuthResult(user=UserView.from_domain(user), token=token)

    async def logout(self, auth_token: AuthToken) -> None:
        await self._core.services.access.ensure_authenticated(auth_token)
        await self._core.services.session.invalidate_session(auth_token)

    async def get_current_user(self, auth_token: AuthToken) -> UserView:
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        return UserView.from_domain(current_user)

    async def update_profile(self, auth_token: AuthToken, update: ProfileUpdate) -> UserView:
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        user = await self._core.services.user.update_profile(current_user.id, update)
        return UserView.from_domain(user)

    async def change_password(self, auth_token: AuthToken, old_password: str, new_password: str) -> None:
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        await self._core.services.user.change_password(current_user.id, old_password, new_password)

    async def get_my_blogs(self, auth_token: AuthToken, page: int = 1) -> BlogPage:
        """Dashboard listing: every blog of the current user, in any status."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        state = BlogListFilterState()
        state.apply_filters(author=str(current_user.id))
        state.handle_page_change(page)
        return await self._list_blogs(state, current_user)

    # === Blogs ===
    async def list_blogs(self, auth_token: AuthToken | None, params: Mapping[str, str | None], page: int = 1) -> BlogPage:
        """General blog listing driven by `search`, `category`, `sort` and `order` parameters."""
        viewer = await self._core.services.access.get_optional_user(auth_token)
        state = BlogListFilterState.from_params(params)
        state.handle_page_change(page)
        return await self._list_blogs(state, viewer)

    async def search_blogs(self, auth_token: AuthToken | None, params: Mapping[str, str | None], page: int = 1) -> BlogPage:
        """Keyword search driven by `q` and `category` parameters."""
        viewer = await self._core.services.access.get_optional_user(auth_token)
        state = SearchFilterState.from_params(params)
        state.handle_page_change(page)
        return await self._list_blogs(state, viewer)

    async def get_blog(self, auth_token: AuthToken | None, identifier: str) -> Blog:
        """Get a blog by ID or slug; viewing a published blog counts a view."""
        viewer = await self._core.services.access.get_optional_user(auth_token)
        blog = await self._resolve_visible_blog(viewer, identifier)
        if blog.is_published:
            return await self._core.services.blog.increment_views(blog.id)
        return blog

    async def create_blog(self, auth_token: AuthToken, data: BlogCreate) -> Blog:
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.blog.create_blog(current_user.id, data)

    async def update_blog(self, auth_token: AuthToken, identifier: str, data: BlogUpdate) -> Blog:
        """Update a blog (author or admin)."""
        blog = await self._core.services.blog.get_blog_by_identifier(identifier)
        await self._core.services.access.ensure_blog_editor(auth_token, blog)
        return await self._core.services.blog.update_blog(blog.id, data)

    async def delete_blog(self, auth_token: AuthToken, identifier: str) -> None:
        """Delete a blog with its comments and likes (author or admin)."""
        blog = await self._core.services.blog.get_blog_by_identifier(identifier)
        await self._core.services.access.ensure_blog_editor(auth_token, blog)
        await self._core.services.blog.delete_blog(blog.id)

    async def toggle_like(self, auth_token: AuthToken, identifier: str) -> LikeToggleResult:
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        blog = await self._resolve_visible_blog(current_user, identifier)
        return await self._core.services.like.toggle_like(blog.id, current_user.id)

    # === Comments ===
    async def get_blog_comments(self, auth_token: AuthToken | None, identifier: str) -> list[Comment]:
        viewer = await self._core.services.access.get_optional_user(auth_token)
        blog = await self._resolve_visible_blog(viewer, identifier)
        return await self._core.services.comment.get_blog_comments(blog.id)

    async def get_comment_tree(self, auth_token: AuthToken | None, identifier: str) -> list[CommentNode]:
        viewer = await self._core.services.access.get_optional_user(auth_token)
        blog = await self._resolve_visible_blog(viewer, identifier)
        return await self._core.services.comment.get_comment_tree(blog.id)

    async def create_comment(
        self, auth_token: AuthToken, identifier: str, content: str, parent_id: UUID | None = None
    ) -> Comment:
        """Comment on a published blog, optionally as a reply."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        blog = await self._resolve_visible_blog(current_user, identifier)
        if not blog.is_published:
            raise ValidationError("Comments are only allowed on published blogs")
        return await self._core.services.comment.create_comment(blog.id, current_user.id, content, parent_id)

    async def delete_comment(self, auth_token: AuthToken, comment_id: UUID) -> None:
        """Delete a comment and its replies (comment author or admin)."""
        current_user = await self._core.services.access.ensure_authenticated(auth_token)
        comment = await self._core.services.comment.get_comment(comment_id)
        if comment.author_id != current_user.id and not current_user.is_admin:
            raise AccessDeniedError("Only the author or an admin can delete this comment")
        await self._core.services.comment.delete_comment(comment)

    # === Categories ===
    async def get_categories(self) -> list[Category]:
        return await self._core.services.category.get_all_categories()

    async def get_category(self, slug: str) -> Category:
        return await self._core.services.category.get_category_by_slug(slug)

    async def create_category(self, auth_token: AuthToken, data: CreateCategory) -> Category:
        """Create a category (admin only)."""
        await self._core.services.access.ensure_admin(auth_token)
        return await self._core.services.category.create_category(data)

    async def delete_category(self, auth_token: AuthToken, slug: str) -> None:
        """Delete a category (admin only)."""
        await self._core.services.access.ensure_admin(auth_token)
        await self._core.services.category.delete_category(slug)

    # === Administration ===
    async def get_all_users(self, auth_token: AuthToken) -> list[UserView]:
        """Get all users (admin only)."""
        await self._core.services.access.ensure_admin(auth_token)
        return [UserView.from_domain(user) for user in self._core.services.user.get_all_users()]

    async def delete_user(self, auth_token: AuthToken, user_id: UUID) -> None:
        """Delete a user with their sessions and blogs (admin only, cannot delete self)."""
        current_user = await self._core.services.access.ensure_admin(auth_token)
        user = self._core.services.user.get_user(user_id)

        if user.id == current_user.id:
            raise ValidationError("Cannot delete yourself")

        # Blogs first so their comments and likes go with them
        await self._core.services.blog.delete_blogs_by_author(user.id)
        await self._core.services.session.invalidate_user_sessions(user.id)
        await self._core.services.user.delete_user(user.id)

    async def get_platform_stats(self, auth_token: AuthToken) -> PlatformStats:
        """Get dashboard statistics (admin only)."""
        await self._core.services.access.ensure_admin(auth_token)
        return await self._core.services.stats.get_platform_stats()

    # === Private helpers ===
    async def _list_blogs(self, state: FilterState, viewer: User | None) -> BlogPage:
        result = await self._core.services.blog.list_blogs(state.filters, viewer)
        return BlogPage(items=result.items, total=result.total, limit=result.limit, offset=result.offset, query=state.query)

    async def _resolve_visible_blog(self, viewer: User | None, identifier: str) -> Blog:
        """Resolve a blog the viewer may see. Hidden blogs are reported as not found."""
        blog = await self._core.services.blog.get_blog_by_identifier(identifier)
        if not self._core.services.access.can_view_blog(viewer, blog):
            raise NotFoundError(f"Blog '{identifier}' not found")
        return blog
