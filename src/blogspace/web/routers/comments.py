from uuid import UUID

from fastapi import APIRouter

from blogspace.core.modules.comment.models import Comment, CommentNode, CreateComment
from blogspace.web.deps import AppDep, AuthTokenDep, OptionalAuthTokenDep
from blogspace.web.openapi import ErrorResponse

router = APIRouter(tags=["comments"])


@router.get(
    "/blogs/{identifier}/comments",
    summary="List blog comments",
    description="Get all comments of a blog as a flat list, oldest first.",
    operation_id="listComments",
    responses={
        200: {"description": "Comments of the blog"},
        404: {"model": ErrorResponse, "description": "Blog not found"},
    },
)
async def list_comments(identifier: str, app: AppDep, auth_token: OptionalAuthTokenDep) -> list[Comment]:
    return await app.get_blog_comments(auth_token, identifier)


@router.get(
    "/blogs/{identifier}/comments/tree",
    summary="Get comment threads",
    description="Get the comments of a blog nested under the comments they reply to.",
    operation_id="getCommentTree",
    responses={
        200: {"description": "Root comments with nested replies"},
        404: {"model": ErrorResponse, "description": "Blog not found"},
    },
)
async def get_comment_tree(identifier: str, app: AppDep, auth_token: OptionalAuthTokenDep) -> list[CommentNode]:
    return await app.get_comment_tree(auth_token, identifier)


@router.post(
    "/blogs/{identifier}/comments",
    summary="Create comment",
    description="Comment on a published blog. Set `parent_id` to reply to an existing comment.",
    operation_id="createComment",
    status_code=201,
    responses={
        201: {"description": "Comment created successfully"},
        400: {"model": ErrorResponse, "description": "Invalid comment or reply too deep"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Blog or parent comment not found"},
    },
)
async def create_comment(identifier: str, data: CreateComment, app: AppDep, auth_token: AuthTokenDep) -> Comment:
    return await app.create_comment(auth_token, identifier, data.content, data.parent_id)


@router.delete(
    "/comments/{comment_id}",
    summary="Delete comment",
    description="Delete a comment and every reply below it. Only the comment author or an admin may delete it.",
    operation_id="deleteComment",
    status_code=204,
    responses={
        204: {"description": "Comment deleted successfully"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Not the author of this comment"},
        404: {"model": ErrorResponse, "description": "Comment not found"},
    },
)
async def delete_comment(comment_id: UUID, app: AppDep, auth_token: AuthTokenDep) -> None:
    await app.delete_comment(auth_token, comment_id)
