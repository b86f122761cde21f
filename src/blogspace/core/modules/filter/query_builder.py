"""Pure functions for building MongoDB queries from blog filters."""

import re
from typing import Any
from uuid import UUID

from blogspace.core.modules.filter.models import BlogFilters, SortField, SortOrder
from blogspace.errors import ValidationError

# Mapping of sort keys to stored document fields
_SORT_FIELD_MAPPING: dict[SortField, str] = {
    SortField.CREATED_AT: "created_at",
    SortField.PUBLISHED_AT: "published_at",
    SortField.TITLE: "title",
    SortField.LIKES: "likes",
    SortField.VIEWS: "views",
}

SEARCH_FIELDS = ("title", "excerpt", "content")


def build_search_query(search: str) -> dict[str, Any]:
    """Case-insensitive substring match over the searchable text fields.

    The search text is escaped, so regex metacharacters match literally.
    """
    pattern = re.escape(search.strip())
    return {"$or": [{field: {"$regex": pattern, "$options": "i"}} for field in SEARCH_FIELDS]}


def parse_author_id(author: str) -> UUID:
    try:
        return UUID(author)
    except ValueError as e:
        raise ValidationError(f"Invalid author id: '{author}'") from e


def build_blog_query(filters: BlogFilters) -> dict[str, Any]:
    """Build MongoDB query document from blog filters.

    Args:
        filters: The filter state of a listing

    Returns:
        MongoDB query document; an empty document matches every blog

    Raises:
        ValidationError: If the author filter is not a valid user id
    """
    query: dict[str, Any] = {}

    if filters.search and filters.search.strip():
        query.update(build_search_query(filters.search))
    if filters.categories:
        query["categories"] = {"$in": filters.categories}
    if filters.tags:
        query["tags"] = {"$in": filters.tags}
    if filters.author:
        query["author_id"] = parse_author_id(filters.author)
    if filters.status is not None:
        query["status"] = filters.status.value

    return query


def build_blog_sort(filters: BlogFilters) -> list[tuple[str, int]]:
    """Build MongoDB sort specification.

    Returns:
        List of (field, direction) tuples; creation time breaks ties
    """
    direction = 1 if filters.sort_order == SortOrder.ASC else -1
    field = _SORT_FIELD_MAPPING[filters.sort_by]
    sort_spec = [(field, direction)]
    if field != "created_at":
        sort_spec.append(("created_at", -1))
    return sort_spec
