"""
Input validation utilities for Repozip.

"Trust, but verify. Especially user input." — schema.cx
"""

import re
from urllib.parse import urlparse

from .errors import ConfigError


class ValidationError(ConfigError):
    """Raised when input validation fails."""

    pass


# GitHub repository names allow alphanumerics, '.', '-' and '_'
ARCHIVE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


def validate_github_token(token: str | None) -> str:
    """
    Validate GitHub personal access token format.

    Args:
        token: GitHub PAT token string

    Returns:
        The token, stripped of surrounding whitespace

    Raises:
        ValidationError: If token is missing or its format is invalid

    Note:
        GitHub classic tokens start with 'ghp_' (40 chars total)
        GitHub fine-grained tokens start with 'github_pat_' (varies in length)
    """
    if token is None or not token.strip():
        raise ValidationError("Token is empty")

    token = token.strip()

    if len(token) < 10:
        raise ValidationError("Token is too short to be valid")

    if len(token) > 255:
        raise ValidationError("Token is too long")

    # Check for whitespace that survives a copy/paste into .env
    if any(c in token for c in [" ", "\n", "\r", "\t"]):
        raise ValidationError("Token contains invalid whitespace characters")

    return token


def validate_archive_name(name: str) -> str:
    """
    Validate a repository name before it becomes a file name.

    Args:
        name: Repository name as reported by the API

    Returns:
        The name if it is safe to join onto the output directory

    Raises:
        ValidationError: If the name is empty, contains path separators or
            is a traversal pattern
    """
    if not name:
        raise ValidationError("Archive name must be a non-empty string")

    if "/" in name or "\\" in name:
        raise ValidationError(f"Path separators are not allowed in archive names: '{name}'")

    if name in (".", ".."):
        raise ValidationError(f"Path traversal patterns are not allowed: '{name}'")

    if not ARCHIVE_NAME_PATTERN.match(name):
        raise ValidationError(
            f"Invalid archive name '{name}'. "
            "Only alphanumeric characters, '.', '-', and '_' are allowed."
        )

    return name


def validate_api_url(url: str) -> str:
    """
    Validate the GitHub API base URL.

    GitHub Enterprise instances live at https://<host>/api/v3.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(f"Invalid API URL '{url}'. Expected http(s)://host[/path]")
    return url.rstrip("/")


def validate_positive(value: float, name: str) -> float:
    """Validate that a numeric option is greater than zero."""
    if value <= 0:
        raise ValidationError(f"{name} must be greater than zero (got {value})")
    return value
