from blogspace.core.core import Service
from blogspace.core.modules.blog.models import Blog
from blogspace.core.modules.session.models import AuthToken
from blogspace.core.modules.user.models import User
from blogspace.errors import AccessDeniedError


class AccessService(Service):
    async def ensure_authenticated(self, auth_token: AuthToken) -> User:
        """Ensure the user is authenticated."""
        return await self.core.services.session.get_authenticated_user(auth_token)

    async def get_optional_user(self, auth_token: AuthToken | None) -> User | None:
        """Resolve the viewer for endpoints that also serve anonymous visitors."""
        if auth_token is None:
            return None
        return await self.core.services.session.get_authenticated_user(auth_token)

    async def ensure_admin(self, auth_token: AuthToken) -> User:
        """Ensure the authenticated user is admin, raise AccessDeniedError if not."""
        user = await self.core.services.session.get_authenticated_user(auth_token)
        if not user.is_admin:
            raise AccessDeniedError("Admin privileges required")
        return user

    async def ensure_blog_editor(self, auth_token: AuthToken, blog: Blog) -> User:
        """Ensure the authenticated user is the blog author or an admin."""
        user = await self.core.services.session.get_authenticated_user(auth_token)
        if blog.author_id != user.id and not user.is_admin:
            raise AccessDeniedError("Only the author or an admin can modify this blog")
        return user

    @staticmethod
    def can_view_blog(user: User | None, blog: Blog) -> bool:
        """Published blogs are public; other states only for the author and admins."""
        if blog.is_published:
            return True
        return user is not None and (user.is_admin or user.id == blog.author_id)
