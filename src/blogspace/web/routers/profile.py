from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from blogspace.core.modules.blog.models import BlogPage
from blogspace.core.modules.user.models import ProfileUpdate, UserView
from blogspace.web.deps import AppDep, AuthTokenDep
from blogspace.web.openapi import ErrorResponse

router = APIRouter(tags=["profile"])


class ChangePasswordRequest(BaseModel):
    """Request to change user password."""

    old_password: str = Field(..., min_length=1, description="Current password")
    new_password: str = Field(..., min_length=1, description="New password")


@router.get(
    "/profile",
    summary="Get current user profile",
    description="Get the profile of the currently authenticated user.",
    operation_id="getCurrentUserProfile",
    responses={
        200: {"description": "Current user profile"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_profile(app: AppDep, auth_token: AuthTokenDep) -> UserView:
    return await app.get_current_user(auth_token)


@router.patch(
    "/profile",
    summary="Update profile",
    description="Update username, full name, avatar or bio. Omitted fields are left unchanged.",
    operation_id="updateProfile",
    responses={
        200: {"description": "Updated profile"},
        400: {"model": ErrorResponse, "description": "Invalid data or username taken"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def update_profile(update: ProfileUpdate, app: AppDep, auth_token: AuthTokenDep) -> UserView:
    return await app.update_profile(auth_token, update)


@router.post(
    "/profile/change-password",
    summary="Change password",
    description="Change the password for the currently authenticated user.",
    operation_id="changePassword",
    status_code=204,
    responses={
        204: {"description": "Password changed successfully"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        400: {"model": ErrorResponse, "description": "Invalid current password or weak new password"},
    },
)
async def change_password(request: ChangePasswordRequest, app: AppDep, auth_token: AuthTokenDep) -> None:
    await app.change_password(auth_token, request.old_password, request.new_password)


@router.get(
    "/profile/blogs",
    summary="List own blogs",
    description="Dashboard listing of the current user's blogs in every status, newest first.",
    operation_id="listMyBlogs",
    responses={
        200: {"description": "Page of the user's blogs"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_my_blogs(
    app: AppDep, auth_token: AuthTokenDep, page: Annotated[int, Query(ge=1, description="One-based page number")] = 1
) -> BlogPage:
    return await app.get_my_blogs(auth_token, page)
