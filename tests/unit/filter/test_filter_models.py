"""Tests for blog filter models and merging."""

import pydantic
import pytest

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


class TestBlogFilters:
    """Tests for the BlogFilters model."""

    def test_defaults(self):
        """Test that sort fields always carry a value."""
        filters = BlogFilters()
        assert filters.sort_by == DEFAULT_SORT_FIELD
        assert filters.sort_order == DEFAULT_SORT_ORDER
        assert filters.offset == 0

    def test_page_from_offset(self):
        """Test one-based page derived from offset and limit."""
        assert BlogFilters(limit=12, offset=0).page == 1
        assert BlogFilters(limit=12, offset=24).page == 3

    def test_unknown_field_rejected(self):
        """Test that unknown fields are not silently accepted."""
        with pytest.raises(pydantic.ValidationError):
            BlogFilters(colour="red")

    def test_sort_key_from_url_value(self):
        """Test that URL sort keys validate into the enum."""
        assert BlogFilters(sort_by="publishedAt", sort_order="asc").sort_by == SortField.PUBLISHED_AT


class TestMergeFilters:
    """Tests for merge_filters function."""

    def test_only_set_fields_change(self):
        """Test that unset fields of the update keep their current value."""
        current = BlogFilters(search="python", categories=["technology"], limit=12)
        merged = merge_filters(current, BlogFiltersUpdate(tags=["async"]))
        assert merged.search == "python"
        assert merged.categories == ["technology"]
        assert merged.tags == ["async"]
        assert merged.limit == 12

    def test_empty_values_clear_field(self):
        """Test that empty strings and lists clear a filter."""
        current = BlogFilters(search="python", categories=["technology"])
        merged = merge_filters(current, BlogFiltersUpdate(search="", categories=[]))
        assert merged.search is None
        assert merged.categories is None

    def test_none_sort_restores_default(self):
        """Test that clearing the sort restores the default sort."""
        current = BlogFilters(sort_by=SortField.TITLE, sort_order=SortOrder.ASC)
        merged = merge_filters(current, BlogFiltersUpdate(sort_by=None, sort_order=None))
        assert merged.sort_by == DEFAULT_SORT_FIELD
        assert merged.sort_order == DEFAULT_SORT_ORDER

    def test_none_limit_keeps_current(self):
        """Test that a None limit does not reset the page size."""
        merged = merge_filters(BlogFilters(limit=20), BlogFiltersUpdate(limit=None))
        assert merged.limit == 20

    def test_offset_is_preserved(self):
        """Test that merging does not touch the offset."""
        merged = merge_filters(BlogFilters(offset=30), BlogFiltersUpdate(status=BlogStatus.PUBLISHED))
        assert merged.offset == 30
        assert merged.status == BlogStatus.PUBLISHED

    def test_update_rejects_offset(self):
        """Test that pagination is not part of a filter change."""
        with pytest.raises(pydantic.ValidationError):
            BlogFiltersUpdate(offset=10)
