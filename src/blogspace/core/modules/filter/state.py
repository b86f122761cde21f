"""Filter state kept in sync with the URL query string of a listing view.

The filter object is the single source of truth. The URL query is derived
from it on every filter change and is only read back once, when a view is
loaded from a URL. Pagination lives in the filter object alone.
"""

import contextlib
import urllib.parse
from collections.abc import Mapping
from typing import Any, ClassVar, Self

import pydantic

from blogspace.core.modules.blog.models import BlogStatus
from blogspace.core.modules.filter.models import (
    DEFAULT_SORT_FIELD,
    DEFAULT_SORT_ORDER,
    BlogFilters,
    BlogFiltersUpdate,
    SortField,
    SortOrder,
    merge_filters,
)
from blogspace.errors import ValidationError

CATEGORY_PARAM = "category"
SORT_PARAM = "sort"
ORDER_PARAM = "order"


class FilterState:
    """Authoritative filters of one browsing session plus their URL form."""

    search_param: ClassVar[str] = "search"
    default_limit: ClassVar[int] = 10
    sort_in_url: ClassVar[bool] = True
    single_category: ClassVar[bool] = False

    def __init__(self, filters: BlogFilters | None = None) -> None:
        self._filters = filters if filters is not None else self.default_filters()
        self._query = self.build_query(self._filters)

    @classmethod
    def default_filters(cls) -> BlogFilters:
        return BlogFilters(sort_by=DEFAULT_SORT_FIELD, sort_order=DEFAULT_SORT_ORDER, limit=cls.default_limit, offset=0)

    @classmethod
    def from_query(cls, query: str) -> Self:
        """Rebuild the view state from a URL query string on initial load."""
        return cls.from_params(dict(urllib.parse.parse_qsl(query.lstrip("?"))))

    @classmethod
    def from_params(cls, params: Mapping[str, str | None]) -> Self:
        """Rebuild the view state from decoded URL parameters.

        Unknown sort keys or directions fall back to the defaults.
        """
        search = (params.get(cls.search_param) or "").strip()
        category = (params.get(CATEGORY_PARAM) or "").strip()

        sort_by, sort_order = DEFAULT_SORT_FIELD, DEFAULT_SORT_ORDER
        if cls.sort_in_url:
            with contextlib.suppress(ValueError):
                sort_by = SortField(params.get(SORT_PARAM) or "")
            with contextlib.suppress(ValueError):
                sort_order = SortOrder(params.get(ORDER_PARAM) or "")

        filters = BlogFilters(
            search=search or None,
            categories=[category] if category else None,
            status=BlogStatus.PUBLISHED,
            sort_by=sort_by,
            sort_order=sort_order,
            limit=cls.default_limit,
            offset=0,
        )
        return cls(filters)

    @classmethod
    def build_query(cls, filters: BlogFilters) -> str:
        """Derive the minimal URL query: default sort values and pagination are omitted."""
        params: dict[str, str] = {}
        if filters.search:
            params[cls.search_param] = filters.search
        if filters.categories:
            params[CATEGORY_PARAM] = filters.categories[0]
        if cls.sort_in_url:
            if filters.sort_by != DEFAULT_SORT_FIELD:
                params[SORT_PARAM] = filters.sort_by.value
            if filters.sort_order != DEFAULT_SORT_ORDER:
                params[ORDER_PARAM] = filters.sort_order.value
        return urllib.parse.urlencode(params)

    @property
    def filters(self) -> BlogFilters:
        return self._filters

    @property
    def query(self) -> str:
        return self._query

    @property
    def page(self) -> int:
        return self._filters.page

    @property
    def has_active_filters(self) -> bool:
        f = self._filters
        return bool(f.search or f.categories or f.sort_by != DEFAULT_SORT_FIELD or f.sort_order != DEFAULT_SORT_ORDER)

    def apply_filters(self, **changes: Any) -> BlogFilters:
        """Merge a filter change, return to the first page and refresh the URL query.

        Raises:
            ValidationError: If a change names an unknown field or carries an invalid value
        """
        try:
            update = BlogFiltersUpdate.model_validate(changes)
        except pydantic.ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
            raise ValidationError(f"Invalid filter change: {fields or e}") from e

        merged = merge_filters(self._filters, update)
        self._filters = merged.model_copy(update={"offset": 0})
        self._query = self.build_query(self._filters)
        return self._filters

    def handle_page_change(self, page: int) -> BlogFilters:
        """Move to a one-based page, leaving every other field and the URL untouched."""
        if page < 1:
            raise ValidationError(f"Page must be 1 or greater, got {page}")
        self._filters = self._filters.model_copy(update={"offset": (page - 1) * self._filters.limit})
        return self._filters

    def clear_filters(self) -> BlogFilters:
        self._filters = self.default_filters()
        self._query = ""
        return self._filters

    def toggle_category(self, slug: str) -> BlogFilters:
        """Select or deselect a category."""
        selected = list(self._filters.categories or [])
        if slug in selected:
            selected.remove(slug)
        elif self.single_category:
            selected = [slug]
        else:
            selected.append(slug)
        return self.apply_filters(categories=selected or None)

    def toggle_tag(self, tag: str) -> BlogFilters:
        selected = list(self._filters.tags or [])
        if tag in selected:
            selected.remove(tag)
        else:
            selected.append(tag)
        return self.apply_filters(tags=selected or None)

    def set_search(self, text: str) -> BlogFilters:
        return self.apply_filters(search=text.strip() or None)

    def set_sort(self, sort_by: SortField | str, sort_order: SortOrder | str) -> BlogFilters:
        return self.apply_filters(sort_by=sort_by, sort_order=sort_order)


class BlogListFilterState(FilterState):
    """General blog listing: multi-category selection, sort reflected in the URL."""

    default_limit = 12


class SearchFilterState(FilterState):
    """Keyword search view: `q` parameter and at most one category at a time."""

    search_param = "q"
    default_limit = 20
    sort_in_url = False
    single_category = True

    @property
    def has_active_filters(self) -> bool:
        return bool(self._filters.search or self._filters.categories)
