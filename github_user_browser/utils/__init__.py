"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_GITHUB_API_URL,
    DEFAULT_REQUEST_TIMEOUT,
    FIELD_PLACEHOLDER,
    REPOSITORIES_PER_PAGE,
    UNKNOWN_LANGUAGE,
)
from .display import field_or_placeholder, language_label, nonzero_count, visibility_label

__all__ = [
    "DEFAULT_GITHUB_API_URL",
    "DEFAULT_REQUEST_TIMEOUT",
    "FIELD_PLACEHOLDER",
    "REPOSITORIES_PER_PAGE",
    "UNKNOWN_LANGUAGE",
    "field_or_placeholder",
    "language_label",
    "nonzero_count",
    "visibility_label",
]
