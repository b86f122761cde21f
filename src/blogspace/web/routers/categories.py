from fastapi import APIRouter

from blogspace.core.modules.category.models import Category, CreateCategory
from blogspace.web.deps import AppDep, AuthTokenDep
from blogspace.web.openapi import ErrorResponse

router = APIRouter(tags=["categories"])


@router.get(
    "/categories",
    summary="List categories",
    description="Get all categories with the number of published blogs in each.",
    operation_id="listCategories",
    responses={
        200: {"description": "List of categories"},
    },
)
async def list_categories(app: AppDep) -> list[Category]:
    return await app.get_categories()


@router.get(
    "/categories/{slug}",
    summary="Get category",
    description="Get a category by its slug.",
    operation_id="getCategory",
    responses={
        200: {"description": "Category details"},
        404: {"model": ErrorResponse, "description": "Category not found"},
    },
)
async def get_category(slug: str, app: AppDep) -> Category:
    return await app.get_category(slug)


@router.post(
    "/categories",
    summary="Create category",
    description="Create a new category. Only accessible by admin users.",
    operation_id="createCategory",
    status_code=201,
    responses={
        201: {"description": "Category created successfully"},
        400: {"model": ErrorResponse, "description": "Invalid data or slug taken"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Admin privileges required"},
    },
)
async def create_category(data: CreateCategory, app: AppDep, auth_token: AuthTokenDep) -> Category:
    return await app.create_category(auth_token, data)


@router.delete(
    "/categories/{slug}",
    summary="Delete category",
    description="Delete a category and remove it from every blog. Only accessible by admin users.",
    operation_id="deleteCategory",
    status_code=204,
    responses={
        204: {"description": "Category deleted successfully"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Admin privileges required"},
        404: {"model": ErrorResponse, "description": "Category not found"},
    },
)
async def delete_category(slug: str, app: AppDep, auth_token: AuthTokenDep) -> None:
    await app.delete_category(auth_token, slug)
