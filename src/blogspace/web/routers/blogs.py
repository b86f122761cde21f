from typing import Annotated

from fastapi import APIRouter, Query

from blogspace.core.modules.blog.models import Blog, BlogCreate, BlogPage, BlogUpdate
from blogspace.core.modules.like.models import LikeToggleResult
from blogspace.web.deps import AppDep, AuthTokenDep, OptionalAuthTokenDep
from blogspace.web.openapi import ErrorResponse

router = APIRouter(tags=["blogs"])

PageQuery = Annotated[int, Query(ge=1, description="One-based page number")]


@router.get(
    "/blogs",
    summary="List blogs",
    description=(
        "Browse published blogs. Filters mirror the listing URL: `search`, `category`, "
        "`sort` (createdAt, publishedAt, title, likes, views) and `order` (asc, desc). "
        "The response carries the normalized URL query for the current filters."
    ),
    operation_id="listBlogs",
    responses={
        200: {"description": "Page of blogs"},
        400: {"model": ErrorResponse, "description": "Invalid filter values"},
    },
)
async def list_blogs(
    app: AppDep,
    auth_token: OptionalAuthTokenDep,
    search: Annotated[str | None, Query(description="Free-text search")] = None,
    category: Annotated[str | None, Query(description="Category slug")] = None,
    sort: Annotated[str | None, Query(description="Sort key")] = None,
    order: Annotated[str | None, Query(description="Sort direction")] = None,
    page: PageQuery = 1,
) -> BlogPage:
    params = {"search": search, "category": category, "sort": sort, "order": order}
    return await app.list_blogs(auth_token, params, page)


@router.get(
    "/search",
    summary="Search blogs",
    description="Keyword search over published blogs, optionally narrowed to one category.",
    operation_id="searchBlogs",
    responses={
        200: {"description": "Page of matching blogs"},
    },
)
async def search_blogs(
    app: AppDep,
    auth_token: OptionalAuthTokenDep,
    q: Annotated[str | None, Query(description="Search text")] = None,
    category: Annotated[str | None, Query(description="Category slug")] = None,
    page: PageQuery = 1,
) -> BlogPage:
    return await app.search_blogs(auth_token, {"q": q, "category": category}, page)


@router.get(
    "/blogs/{identifier}",
    summary="Get blog",
    description="Get a blog by ID or slug. Viewing a published blog increments its view count.",
    operation_id="getBlog",
    responses={
        200: {"description": "Blog details"},
        404: {"model": ErrorResponse, "description": "Blog not found"},
    },
)
async def get_blog(identifier: str, app: AppDep, auth_token: OptionalAuthTokenDep) -> Blog:
    return await app.get_blog(auth_token, identifier)


@router.post(
    "/blogs",
    summary="Create blog",
    description="Create a new blog authored by the current user.",
    operation_id="createBlog",
    status_code=201,
    responses={
        201: {"description": "Blog created successfully"},
        400: {"model": ErrorResponse, "description": "Invalid blog data"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_blog(data: BlogCreate, app: AppDep, auth_token: AuthTokenDep) -> Blog:
    return await app.create_blog(auth_token, data)


@router.patch(
    "/blogs/{identifier}",
    summary="Update blog",
    description="Partially update a blog. Only the author or an admin may edit it.",
    operation_id="updateBlog",
    responses={
        200: {"description": "Blog updated successfully"},
        400: {"model": ErrorResponse, "description": "Invalid blog data"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Not the author of this blog"},
        404: {"model": ErrorResponse, "description": "Blog not found"},
    },
)
async def update_blog(identifier: str, data: BlogUpdate, app: AppDep, auth_token: AuthTokenDep) -> Blog:
    return await app.update_blog(auth_token, identifier, data)


@router.delete(
    "/blogs/{identifier}",
    summary="Delete blog",
    description="Delete a blog with all its comments and likes. Only the author or an admin may delete it.",
    operation_id="deleteBlog",
    status_code=204,
    responses={
        204: {"description": "Blog deleted successfully"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Not the author of this blog"},
        404: {"model": ErrorResponse, "description": "Blog not found"},
    },
)
async def delete_blog(identifier: str, app: AppDep, auth_token: AuthTokenDep) -> None:
    await app.delete_blog(auth_token, identifier)


@router.post(
    "/blogs/{identifier}/like",
    summary="Toggle like",
    description="Like the blog, or remove the like if the current user already liked it.",
    operation_id="toggleBlogLike",
    responses={
        200: {"description": "New like state and count"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Blog not found"},
    },
)
async def toggle_like(identifier: str, app: AppDep, auth_token: AuthTokenDep) -> LikeToggleResult:
    return await app.toggle_like(auth_token, identifier)
