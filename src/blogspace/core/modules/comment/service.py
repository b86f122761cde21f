from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from blogspace.core.core import Service
from blogspace.core.modules.comment.models import Comment, CommentNode
from blogspace.core.modules.comment.tree import build_comment_tree, can_reply, collect_reply_ids
from blogspace.core.modules.user.models import UserView
from blogspace.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class CommentService(Service):
    """Manages threaded comments on blogs."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("comments")

    async def on_start(self) -> None:
        await self._collection.create_index([("blog_id", 1), ("created_at", 1)])
        await self._collection.create_index([("parent_id", 1)])
        await self._collection.create_index([("author_id", 1)])

    async def get_comment(self, comment_id: UUID) -> Comment:
        doc = await self._collection.find_one({"_id": comment_id})
        if doc is None:
            raise NotFoundError(f"Comment '{comment_id}' not found")
        return Comment.model_validate(doc)

    async def get_comment_depth(self, comment: Comment) -> int:
        """Nesting depth of a stored comment, root comments being 0."""
        depth = 0
        parent_id = comment.parent_id
        seen: set[UUID] = {comment.id}
        while parent_id is not None and parent_id not in seen:
            parent = await self._collection.find_one({"_id": parent_id}, projection={"parent_id": 1})
            if parent is None:
                break
            seen.add(parent_id)
            depth += 1
            parent_id = parent.get("parent_id")
        return depth

    async def create_comment(self, blog_id: UUID, author_id: UUID, content: str, parent_id: UUID | None = None) -> Comment:
        """Create a comment or a reply.

        Raises:
            ValidationError: If the content is blank, the parent belongs to another blog,
                or the parent is already at the maximum reply depth
            NotFoundError: If the parent comment does not exist
        """
        content = content.strip()
        if not content:
            raise ValidationError("Comment content cannot be empty")

        if parent_id is not None:
            parent = await self.get_comment(parent_id)
            if parent.blog_id != blog_id:
                raise ValidationError("Parent comment belongs to a different blog")
            max_depth = self.core.config.comment_max_depth
            if not can_reply(await self.get_comment_depth(parent), max_depth):
                raise ValidationError(f"Replies are limited to {max_depth} levels")

        comment = Comment(blog_id=blog_id, author_id=author_id, content=content, parent_id=parent_id)
        await self._collection.insert_one(comment.to_mongo())
        logger.info("comment_created", comment_id=comment.id, blog_id=blog_id, parent_id=parent_id)
        return self._with_author(comment)

    async def get_blog_comments(self, blog_id: UUID) -> list[Comment]:
        """Get all comments of a blog as a flat list, oldest first."""
        cursor = self._collection.find({"blog_id": blog_id}).sort("created_at", 1)
        comments = await Comment.list_cursor(cursor)
        return [self._with_author(comment) for comment in comments]

    async def get_comment_tree(self, blog_id: UUID) -> list[CommentNode]:
        """Get the comments of a blog arranged as reply threads."""
        return build_comment_tree(await self.get_blog_comments(blog_id))

    async def delete_comment(self, comment: Comment) -> int:
        """Delete a comment together with all replies below it."""
        comments = await Comment.list_cursor(self._collection.find({"blog_id": comment.blog_id}))
        ids = [comment.id, *collect_reply_ids(comments, comment.id)]
        result = await self._collection.delete_many({"_id": {"$in": ids}})
        logger.info("comment_deleted", comment_id=comment.id, deleted=result.deleted_count)
        return result.deleted_count

    async def delete_comments_by_blog(self, blog_id: UUID) -> int:
        """Delete all comments of a blog and return count of deleted comments."""
        result = await self._collection.delete_many({"blog_id": blog_id})
        return result.deleted_count

    def _with_author(self, comment: Comment) -> Comment:
        author = self.core.services.user.find_user(comment.author_id)
        comment.author = UserView.from_domain(author) if author is not None else None
        return comment
