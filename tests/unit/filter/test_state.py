"""Tests for URL-synchronized filter state."""

import urllib.parse

import pytest

from blogspace.core.modules.blog.models import BlogStatus
from blogspace.core.modules.filter.models import DEFAULT_SORT_FIELD, DEFAULT_SORT_ORDER, SortField, SortOrder
from blogspace.core.modules.filter.state import BlogListFilterState, FilterState, SearchFilterState
from blogspace.errors import ValidationError


def _params(query: str) -> dict[str, str]:
    return dict(urllib.parse.parse_qsl(query))


class TestInitialState:
    """Tests for default construction."""

    def test_defaults(self):
        """Test a fresh state has default filters and an empty query."""
        state = BlogListFilterState()
        assert state.filters.sort_by == DEFAULT_SORT_FIELD
        assert state.filters.sort_order == DEFAULT_SORT_ORDER
        assert state.filters.limit == 12
        assert state.filters.offset == 0
        assert state.query == ""
        assert not state.has_active_filters

    def test_view_page_sizes(self):
        """Test that each view uses its own page size."""
        assert BlogListFilterState().filters.limit == 12
        assert SearchFilterState().filters.limit == 20
        assert FilterState().filters.limit == 10


class TestFromQuery:
    """Tests for reconstructing state from a URL on initial load."""

    def test_list_view_params(self):
        """Test that search, category and sort are read from the URL."""
        state = BlogListFilterState.from_query("?search=python&category=technology&sort=title&order=asc")
        f = state.filters
        assert f.search == "python"
        assert f.categories == ["technology"]
        assert f.sort_by == SortField.TITLE
        assert f.sort_order == SortOrder.ASC
        assert f.status == BlogStatus.PUBLISHED
        assert f.offset == 0

    def test_missing_params_fall_back_to_defaults(self):
        """Test that an empty query yields default sort and no criteria."""
        state = BlogListFilterState.from_query("")
        assert state.filters.search is None
        assert state.filters.categories is None
        assert state.filters.sort_by == DEFAULT_SORT_FIELD
        assert state.query == ""

    def test_invalid_sort_values_ignored(self):
        """Test that unknown sort keys and directions fall back to defaults."""
        state = BlogListFilterState.from_query("sort=random&order=sideways")
        assert state.filters.sort_by == DEFAULT_SORT_FIELD
        assert state.filters.sort_order == DEFAULT_SORT_ORDER

    def test_search_view_uses_q_and_ignores_sort(self):
        """Test that the search view reads `q` and never takes sort from the URL."""
        state = SearchFilterState.from_query("q=react&category=technology&sort=title")
        assert state.filters.search == "react"
        assert state.filters.categories == ["technology"]
        assert state.filters.sort_by == DEFAULT_SORT_FIELD
        assert _params(state.query) == {"q": "react", "category": "technology"}

    def test_query_is_normalized(self):
        """Test that the derived query drops default sort values."""
        state = BlogListFilterState.from_query("search=go&sort=createdAt&order=desc")
        assert state.query == "search=go"


class TestApplyFilters:
    """Tests for apply_filters."""

    def test_filter_change_resets_offset(self):
        """Test that any filter change returns to the first page."""
        state = BlogListFilterState()
        state.handle_page_change(3)
        assert state.filters.offset == 24

        state.apply_filters(search="python")

        assert state.filters.offset == 0
        assert state.page == 1

    def test_query_follows_filters(self):
        """Test that the URL query is rebuilt from the filters."""
        state = BlogListFilterState()
        state.apply_filters(search="python", categories=["technology"], sort_by="likes")
        assert _params(state.query) == {"search": "python", "category": "technology", "sort": "likes"}

    def test_non_default_order_is_written(self):
        """Test that only non-default sort values appear in the URL."""
        state = BlogListFilterState()
        state.apply_filters(sort_order=SortOrder.ASC)
        assert _params(state.query) == {"order": "asc"}

    def test_query_equals_derivation_after_every_change(self):
        """Test that the query always equals the one derived from the filters."""
        state = BlogListFilterState()
        for changes in ({"search": "a"}, {"categories": ["science"]}, {"sort_by": "views"}, {"search": ""}):
            state.apply_filters(**changes)
            assert state.query == BlogListFilterState.build_query(state.filters)

    def test_unset_fields_are_kept(self):
        """Test that a change leaves other filters alone."""
        state = BlogListFilterState()
        state.apply_filters(search="python", tags=["async"])
        state.apply_filters(categories=["technology"])
        assert state.filters.search == "python"
        assert state.filters.tags == ["async"]

    def test_unknown_field_rejected(self):
        """Test that unknown filter fields raise ValidationError."""
        state = BlogListFilterState()
        with pytest.raises(ValidationError, match="colour"):
            state.apply_filters(colour="red")

    def test_offset_is_not_a_filter_change(self):
        """Test that the offset cannot be set through a filter change."""
        with pytest.raises(ValidationError, match="offset"):
            BlogListFilterState().apply_filters(offset=12)

    def test_invalid_value_rejected(self):
        """Test that an invalid sort key raises ValidationError."""
        with pytest.raises(ValidationError):
            BlogListFilterState().apply_filters(sort_by="random")


class TestHandlePageChange:
    """Tests for handle_page_change."""

    def test_sets_offset_from_page(self):
        """Test offset equals (page - 1) * limit."""
        state = BlogListFilterState()
        state.handle_page_change(3)
        assert state.filters.offset == 24
        assert state.page == 3

    def test_query_and_filters_unchanged(self):
        """Test that paging touches only the offset and never the URL."""
        state = BlogListFilterState.from_query("search=python&sort=title")
        before_query = state.query
        before = state.filters.model_dump(exclude={"offset"})

        state.handle_page_change(5)

        assert state.query == before_query
        assert state.filters.model_dump(exclude={"offset"}) == before

    def test_page_below_one_rejected(self):
        """Test that page numbers below one raise ValidationError."""
        state = BlogListFilterState()
        with pytest.raises(ValidationError, match="Page must be 1 or greater"):
            state.handle_page_change(0)
        assert state.filters.offset == 0


class TestClearFilters:
    """Tests for clear_filters."""

    def test_resets_everything(self):
        """Test that clearing restores defaults and empties the URL query."""
        state = BlogListFilterState.from_query("search=python&category=technology&sort=title&order=asc")
        state.handle_page_change(2)

        state.clear_filters()

        assert state.filters == BlogListFilterState.default_filters()
        assert state.query == ""
        assert not state.has_active_filters

    def test_clear_then_empty_change_equals_defaults(self):
        """Test that an empty filter change after clearing keeps the default filters."""
        state = BlogListFilterState()
        state.apply_filters(search="python", categories=["technology"], tags=["async"], sort_by="title", sort_order="asc")
        state.handle_page_change(3)

        state.clear_filters()
        result = state.apply_filters()

        assert result == BlogListFilterState.default_filters()
        assert state.filters == BlogListFilterState.default_filters()
        assert state.query == ""


class TestToggles:
    """Tests for category and tag toggles."""

    def test_multi_category_toggle(self):
        """Test that the list view accumulates categories."""
        state = BlogListFilterState()
        state.toggle_category("technology")
        state.toggle_category("science")
        assert state.filters.categories == ["technology", "science"]

        state.toggle_category("technology")
        assert state.filters.categories == ["science"]

        state.toggle_category("science")
        assert state.filters.categories is None
        assert state.query == ""

    def test_single_category_toggle_replaces(self):
        """Test that the search view keeps at most one category."""
        state = SearchFilterState()
        state.toggle_category("technology")
        state.toggle_category("science")
        assert state.filters.categories == ["science"]

    def test_tag_toggle(self):
        """Test that tags are added and removed."""
        state = BlogListFilterState()
        state.toggle_tag("python")
        assert state.filters.tags == ["python"]
        state.toggle_tag("python")
        assert state.filters.tags is None

    def test_toggle_resets_page(self):
        """Test that toggles are filter changes and reset the offset."""
        state = BlogListFilterState()
        state.handle_page_change(4)
        state.toggle_category("travel")
        assert state.filters.offset == 0


class TestSearchAndSort:
    """Tests for set_search and set_sort."""

    def test_set_search_strips_and_clears(self):
        """Test that blank search text clears the search."""
        state = SearchFilterState()
        state.set_search("  react  ")
        assert state.filters.search == "react"
        assert state.query == "q=react"

        state.set_search("   ")
        assert state.filters.search is None
        assert state.query == ""

    def test_set_sort(self):
        """Test that sort changes are applied and reflected in the URL."""
        state = BlogListFilterState()
        state.set_sort("views", "asc")
        assert state.filters.sort_by == SortField.VIEWS
        assert state.filters.sort_order == SortOrder.ASC
        assert _params(state.query) == {"sort": "views", "order": "asc"}

    def test_search_view_sort_not_in_url(self):
        """Test that the search view never writes sort parameters."""
        state = SearchFilterState()
        state.set_sort(SortField.TITLE, SortOrder.ASC)
        assert state.query == ""
        assert not state.has_active_filters
