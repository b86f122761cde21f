import re
from typing import Any

from blogspace.errors import ValidationError

USERNAME_RE = re.compile(r"^[A-Za-z0-9_]{3,30}$")
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - No whitespace characters
    - Minimum length of 6 characters

    Raises:
        ValidationError: If password doesn't meet requirements
    """
    if len(password) < 6:
        raise ValidationError("Password must be at least 6 characters long")

    if any(char.isspace() for char in password):
        raise ValidationError("Password cannot contain whitespace characters")


def validate_password_confirmation(password: str, confirm_password: str) -> None:
    if password != confirm_password:
        raise ValidationError("Passwords do not match")


def validate_username(username: str) -> None:
    if not USERNAME_RE.fullmatch(username):
        raise ValidationError("Username must be 3-30 characters: letters, digits or underscores")


def normalize_email(email: str) -> str:
    """Lowercase and validate an email address."""
    normalized = email.strip().lower()
    if not EMAIL_RE.fullmatch(normalized):
        raise ValidationError(f"Invalid email address: '{email}'")
    return normalized


def validate_profile_changes(changes: dict[str, Any]) -> None:
    """Validate explicitly set profile fields before they are stored.

    Username and full name may be changed but never cleared.
    """
    if "username" in changes:
        if changes["username"] is None:
            raise ValidationError("Username is required")
        validate_username(changes["username"])
    if "full_name" in changes and not (changes["full_name"] or "").strip():
        raise ValidationError("Full name is required")
