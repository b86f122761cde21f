from uuid import UUID

from fastapi import APIRouter

from blogspace.core.modules.stats.models import PlatformStats
from blogspace.core.modules.user.models import UserView
from blogspace.web.deps import AppDep, AuthTokenDep
from blogspace.web.openapi import ErrorResponse

router = APIRouter(tags=["admin"])


@router.get(
    "/admin/users",
    summary="List all users",
    description="Get all users, newest first. Only accessible by admin users.",
    operation_id="listUsers",
    responses={
        200: {"description": "List of all users"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Admin privileges required"},
    },
)
async def list_users(app: AppDep, auth_token: AuthTokenDep) -> list[UserView]:
    return await app.get_all_users(auth_token)


@router.delete(
    "/admin/users/{user_id}",
    summary="Delete user",
    description="Delete a user account with their sessions and blogs. Admins cannot delete themselves.",
    operation_id="deleteUser",
    status_code=204,
    responses={
        204: {"description": "User deleted successfully"},
        400: {"model": ErrorResponse, "description": "Cannot delete yourself"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Admin privileges required"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def delete_user(user_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> None:
    await app.delete_user(auth_token, user_id)


@router.get(
    "/admin/stats",
    summary="Platform statistics",
    description="Counts of users, blogs, views and likes plus the most recent blogs.",
    operation_id="getPlatformStats",
    responses={
        200: {"description": "Dashboard statistics"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Admin privileges required"},
    },
)
async def get_stats(app: AppDep, auth_token: AuthTokenDep) -> PlatformStats:
    return await app.get_platform_stats(auth_token)
