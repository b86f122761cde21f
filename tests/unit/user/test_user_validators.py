"""Tests for user input validators."""

import pytest

from blogspace.core.modules.user.models import ProfileUpdate
from blogspace.core.modules.user.validators import (
    normalize_email,
    validate_password,
    validate_password_confirmation,
    validate_profile_changes,
    validate_username,
)
from blogspace.errors import ValidationError


class TestValidatePassword:
    """Tests for validate_password function."""

    def test_valid_password(self):
        """Test that a long enough password passes."""
        validate_password("secret1")

    def test_too_short(self):
        """Test that short passwords are rejected."""
        with pytest.raises(ValidationError, match="at least 6 characters"):
            validate_password("abc")

    def test_whitespace_rejected(self):
        """Test that passwords with whitespace are rejected."""
        with pytest.raises(ValidationError, match="whitespace"):
            validate_password("secret password")


class TestValidatePasswordConfirmation:
    """Tests for validate_password_confirmation function."""

    def test_matching(self):
        """Test that matching passwords pass."""
        validate_password_confirmation("secret1", "secret1")

    def test_mismatch(self):
        """Test that different passwords are rejected."""
        with pytest.raises(ValidationError, match="do not match"):
            validate_password_confirmation("secret1", "secret2")


class TestValidateUsername:
    """Tests for validate_username function."""

    @pytest.mark.parametrize("username", ["bob", "jane_doe", "User123"])
    def test_valid(self, username):
        """Test that letters, digits and underscores are accepted."""
        validate_username(username)

    @pytest.mark.parametrize("username", ["ab", "with space", "dash-name", "x" * 31])
    def test_invalid(self, username):
        """Test that short, long or punctuated usernames are rejected."""
        with pytest.raises(ValidationError, match="Username must be"):
            validate_username(username)


class TestNormalizeEmail:
    """Tests for normalize_email function."""

    def test_lowercase_and_strip(self):
        """Test that emails are trimmed and lowercased."""
        assert normalize_email("  Jane.Doe@Example.COM ") == "jane.doe@example.com"

    def test_invalid_email(self):
        """Test that malformed addresses are rejected."""
        with pytest.raises(ValidationError, match="Invalid email"):
            normalize_email("not-an-email")


class TestValidateProfileChanges:
    """Tests for validate_profile_changes function."""

    def test_optional_fields_can_be_cleared(self):
        """Test that avatar and bio may be set to None."""
        validate_profile_changes({"avatar": None, "bio": None})

    def test_valid_changes(self):
        """Test that a new username and full name pass."""
        validate_profile_changes({"username": "new_name", "full_name": "New Name"})

    def test_empty_changes(self):
        """Test that no changes pass."""
        validate_profile_changes({})

    def test_null_username_rejected(self):
        """Test that the username cannot be cleared."""
        with pytest.raises(ValidationError, match="Username is required"):
            validate_profile_changes(ProfileUpdate(username=None).model_dump(exclude_unset=True))

    def test_invalid_username_rejected(self):
        """Test that a malformed username is rejected."""
        with pytest.raises(ValidationError, match="Username must be"):
            validate_profile_changes({"username": "a b"})

    @pytest.mark.parametrize("full_name", [None, "", "   "])
    def test_blank_full_name_rejected(self, full_name):
        """Test that the full name cannot be cleared."""
        with pytest.raises(ValidationError, match="Full name is required"):
            validate_profile_changes({"full_name": full_name})
