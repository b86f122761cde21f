"""Tests for blog query builder pure functions."""

import re
from uuid import UUID

import pytest

from blogspace.core.modules.blog.models import BlogStatus
from blogspace.core.modules.filter.models import BlogFilters, SortField, SortOrder
from blogspace.core.modules.filter.query_builder import (
    SEARCH_FIELDS,
    build_blog_query,
    build_blog_sort,
    build_search_query,
    parse_author_id,
)
from blogspace.errors import ValidationError


class TestBuildSearchQuery:
    """Tests for build_search_query function."""

    def test_matches_every_search_field(self):
        """Test that the search is an $or over title, excerpt and content."""
        result = build_search_query("python")
        assert result == {"$or": [{field: {"$regex": "python", "$options": "i"}} for field in SEARCH_FIELDS]}

    def test_regex_metacharacters_are_escaped(self):
        """Test that user text is matched literally."""
        result = build_search_query("c++ (basics)")
        pattern = result["$or"][0]["title"]["$regex"]
        assert re.search(pattern, "intro to c++ (basics)")
        assert not re.search(pattern, "cc (basics)")

    def test_surrounding_whitespace_is_stripped(self):
        """Test that leading and trailing whitespace is ignored."""
        assert build_search_query("  react  ") == build_search_query("react")


class TestParseAuthorId:
    """Tests for parse_author_id function."""

    def test_valid_uuid(self):
        """Test that a UUID string is parsed."""
        value = "12345678-1234-5678-1234-567812345678"
        assert parse_author_id(value) == UUID(value)

    def test_invalid_uuid_raises_error(self):
        """Test that a malformed id raises ValidationError."""
        with pytest.raises(ValidationError, match="Invalid author id"):
            parse_author_id("not-a-uuid")


class TestBuildBlogQuery:
    """Tests for build_blog_query function."""

    def test_default_filters_match_everything(self):
        """Test that filters without criteria build an empty query."""
        assert build_blog_query(BlogFilters()) == {}

    def test_categories_and_tags_use_in(self):
        """Test that list filters match any of the given values."""
        filters = BlogFilters(categories=["technology", "science"], tags=["python"])
        result = build_blog_query(filters)
        assert result["categories"] == {"$in": ["technology", "science"]}
        assert result["tags"] == {"$in": ["python"]}

    def test_author_is_converted_to_uuid(self):
        """Test that the author filter is stored as a UUID."""
        author = "87654321-4321-8765-4321-876543218765"
        assert build_blog_query(BlogFilters(author=author)) == {"author_id": UUID(author)}

    def test_status_uses_stored_value(self):
        """Test that the status filter uses the enum value."""
        assert build_blog_query(BlogFilters(status=BlogStatus.PUBLISHED)) == {"status": "published"}

    def test_blank_search_is_ignored(self):
        """Test that whitespace-only search text adds no criteria."""
        assert build_blog_query(BlogFilters(search="   ")) == {}

    def test_combined_filters(self):
        """Test that search and other filters are combined in one query."""
        filters = BlogFilters(search="async", categories=["technology"], status=BlogStatus.DRAFT)
        result = build_blog_query(filters)
        assert "$or" in result
        assert result["categories"] == {"$in": ["technology"]}
        assert result["status"] == "draft"

    def test_invalid_author_raises_error(self):
        """Test that an invalid author id propagates ValidationError."""
        with pytest.raises(ValidationError):
            build_blog_query(BlogFilters(author="bob"))


class TestBuildBlogSort:
    """Tests for build_blog_sort function."""

    def test_default_sort_is_newest_first(self):
        """Test default sort on creation time descending."""
        assert build_blog_sort(BlogFilters()) == [("created_at", -1)]

    def test_ascending_creation_time(self):
        """Test ascending sort on creation time has no tie-breaker."""
        assert build_blog_sort(BlogFilters(sort_order=SortOrder.ASC)) == [("created_at", 1)]

    def test_other_fields_break_ties_by_creation_time(self):
        """Test that non-creation sorts fall back to newest first."""
        filters = BlogFilters(sort_by=SortField.TITLE, sort_order=SortOrder.ASC)
        assert build_blog_sort(filters) == [("title", 1), ("created_at", -1)]

    def test_sort_keys_map_to_document_fields(self):
        """Test mapping of URL sort keys to stored fields."""
        assert build_blog_sort(BlogFilters(sort_by=SortField.PUBLISHED_AT))[0] == ("published_at", -1)
        assert build_blog_sort(BlogFilters(sort_by=SortField.LIKES))[0] == ("likes", -1)
        assert build_blog_sort(BlogFilters(sort_by=SortField.VIEWS))[0] == ("views", -1)
