"""Reply tree reconstruction for flat comment lists."""

from collections.abc import Iterable, Iterator
from uuid import UUID

from blogspace.core.modules.comment.models import Comment, CommentNode

DEFAULT_MAX_REPLY_DEPTH = 3


def build_comment_tree(comments: Iterable[Comment]) -> list[CommentNode]:
    """Arrange comments into a forest of root comments with nested replies.

    Input order is irrelevant except that roots and siblings keep their
    relative input order. Every node is a copy, so the caller's comments are
    never mutated. A comment whose parent is not in the input is dropped.
    """
    comments = list(comments)
    nodes: dict[UUID, CommentNode] = {}
    for comment in comments:
        data = comment.model_dump(exclude={"replies"})
        nodes[comment.id] = CommentNode.model_validate({**data, "replies": []})

    roots: list[CommentNode] = []
    for comment in comments:
        node = nodes[comment.id]
        if comment.parent_id is None:
            roots.append(node)
            continue
        parent = nodes.get(comment.parent_id)
        if parent is not None:
            parent.replies.append(node)

    return roots


def iter_comment_tree(nodes: Iterable[CommentNode], depth: int = 0) -> Iterator[tuple[CommentNode, int]]:
    """Depth-first pre-order walk yielding each node with its depth (roots are 0)."""
    for node in nodes:
        yield node, depth
        yield from iter_comment_tree(node.replies, depth + 1)


def can_reply(depth: int, max_depth: int = DEFAULT_MAX_REPLY_DEPTH) -> bool:
    """Whether a comment at `depth` still offers a reply action.

    This only limits new replies; existing deeper replies stay in the tree.
    """
    return depth < max_depth


def collect_reply_ids(comments: Iterable[Comment], comment_id: UUID) -> list[UUID]:
    """IDs of every reply below `comment_id`, at any depth.

    Works on the flat list, so replies inside an orphaned thread are found too.
    """
    children: dict[UUID, list[UUID]] = {}
    for comment in comments:
        if comment.parent_id is not None:
            children.setdefault(comment.parent_id, []).append(comment.id)

    result: list[UUID] = []
    seen = {comment_id}
    pending = list(children.get(comment_id, []))
    while pending:
        reply_id = pending.pop()
        if reply_id in seen:
            continue
        seen.add(reply_id)
        result.append(reply_id)
        pending.extend(children.get(reply_id, []))
    return result
