"""Shared pytest fixtures."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from blogspace.core.modules.comment.models import Comment
from blogspace.core.modules.user.models import User, UserRole


@pytest.fixture
def mock_user():
    """Create a regular user for testing."""
    return User(
        id=UUID("87654321-4321-8765-4321-876543218765"),
        email="reader@example.com",
        username="reader",
        full_name="Test Reader",
        password_hash="$2b$12$hashed_password_here",
    )


@pytest.fixture
def mock_admin():
    """Create an admin user for testing."""
    return User(
        id=UUID("12345678-1234-5678-1234-567812345678"),
        email="admin@example.com",
        username="admin",
        full_name="Admin",
        password_hash="$2b$12$hashed_password_here",
        role=UserRole.ADMIN,
    )


@pytest.fixture
def blog_id():
    return UUID("11111111-2222-3333-4444-555555555555")


@pytest.fixture
def make_comment(blog_id, mock_user):
    """Factory for comments of one blog with increasing creation times."""
    base = datetime(2025, 1, 1, tzinfo=UTC)
    counter = iter(range(10_000))

    def _make(content: str, parent: Comment | None = None) -> Comment:
        created_at = base + timedelta(minutes=next(counter))
        return Comment(
            id=uuid4(),
            content=content,
            blog_id=blog_id,
            author_id=mock_user.id,
            parent_id=parent.id if parent is not None else None,
            created_at=created_at,
            updated_at=created_at,
        )

    return _make
