"""Helpers turning listing records into display strings."""

from github_user_browser.schemas.github import Repository
from github_user_browser.utils.constants import FIELD_PLACEHOLDER, UNKNOWN_LANGUAGE


def field_or_placeholder(value: object | None) -> str:
    """Render a profile field, falling back to the placeholder when absent or empty."""
    if value is None or value == "":
        return FIELD_PLACEHOLDER
    return str(value)


def language_label(repository: Repository) -> str:
    """Render the primary language of a repository."""
    return repository.language or UNKNOWN_LANGUAGE


def visibility_label(repository: Repository) -> str | None:
    """Render the visibility badge of a repository.

    Public repositories are badged ``Public`` or ``Public Archived``. Other
    visibilities get no badge.
    """
    if repository.visibility.lower() != "public":
        return None
    if repository.archived:
        return "Public Archived"
    return "Public"


def nonzero_count(count: int | None) -> str | None:
    """Render a counter, hiding it when it is zero or unknown."""
    if not count:
        return None
    return str(count)
