"""Tests for pagination result and blog page models."""

from blogspace.core.modules.blog.models import BlogPage
from blogspace.core.pagination import PaginationResult


class TestPaginationResult:
    """Tests for PaginationResult properties."""

    def test_first_page(self):
        """Test page numbers on the first page."""
        result = PaginationResult[int](items=[1, 2, 3], total=7, limit=3, offset=0)
        assert result.page == 1
        assert result.total_pages == 3
        assert result.has_more

    def test_last_page(self):
        """Test that the last page has no more items."""
        result = PaginationResult[int](items=[7], total=7, limit=3, offset=6)
        assert result.page == 3
        assert not result.has_more

    def test_empty_result_has_one_page(self):
        """Test that an empty listing still reports one page."""
        result = PaginationResult[int](items=[], total=0, limit=12, offset=0)
        assert result.total_pages == 1
        assert not result.has_more


class TestBlogPage:
    """Tests for BlogPage serialization."""

    def test_serializes_page_and_query(self):
        """Test that page numbers and the URL query are part of the response."""
        page = BlogPage(items=[], total=30, limit=12, offset=12, query="search=python")
        data = page.model_dump()
        assert data["page"] == 2
        assert data["total_pages"] == 3
        assert data["query"] == "search=python"
