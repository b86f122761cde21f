"""Blog listing filters shared by the list and search views."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from blogspace.core.modules.blog.models import BlogStatus


class SortField(StrEnum):
    """Sort keys as they appear in the `sort` URL parameter."""

    CREATED_AT = "createdAt"
    PUBLISHED_AT = "publishedAt"
    TITLE = "title"
    LIKES = "likes"
    VIEWS = "views"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


DEFAULT_SORT_FIELD = SortField.CREATED_AT
DEFAULT_SORT_ORDER = SortOrder.DESC


class BlogFilters(BaseModel):
    """Authoritative filter state for a blog listing.

    `sort_by`/`sort_order` always carry a value, so a filter object is never
    in an ambiguous sort state. `offset` counts records, not pages.
    """

    model_config = ConfigDict(extra="forbid")

    search: str | None = Field(None, description="Free-text query over title, excerpt and content")
    categories: list[str] | None = Field(None, description="Category slugs (any of)")
    tags: list[str] | None = Field(None, description="Tags (any of)")
    author: str | None = Field(None, description="Author user ID")
    status: BlogStatus | None = Field(None, description="Publication status")
    sort_by: SortField = Field(DEFAULT_SORT_FIELD, description="Sort key")
    sort_order: SortOrder = Field(DEFAULT_SORT_ORDER, description="Sort direction")
    limit: int = Field(10, ge=1, le=100, description="Page size")
    offset: int = Field(0, ge=0, description="Number of records skipped")

    @property
    def page(self) -> int:
        """One-based page number for display."""
        return self.offset // self.limit + 1


class BlogFiltersUpdate(BaseModel):
    """Partial filter change. Pagination offset is not part of a filter change."""

    model_config = ConfigDict(extra="forbid")

    search: str | None = None
    categories: list[str] | None = None
    tags: list[str] | None = None
    author: str | None = None
    status: BlogStatus | None = None
    sort_by: SortField | None = None
    sort_order: SortOrder | None = None
    limit: int | None = Field(None, ge=1, le=100)


def merge_filters(current: BlogFilters, update: BlogFiltersUpdate) -> BlogFilters:
    """Merge the explicitly set fields of `update` into `current`.

    Empty strings and empty lists clear the field. A None sort field
    restores the default sort, a None limit keeps the current one.
    """
    data = current.model_dump()
    for name in BlogFiltersUpdate.model_fields:
        if name not in update.model_fields_set:
            continue
        value = getattr(update, name)
        if value is None and name in ("sort_by", "sort_order"):
            value = BlogFilters.model_fields[name].default
        elif value is None and name == "limit":
            continue
        elif value == "" or value == []:
            value = None
        data[name] = value
    return BlogFilters.model_validate(data)
