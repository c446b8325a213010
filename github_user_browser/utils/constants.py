"""Shared constants used across the application."""

# GitHub API Constants
# --------------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Base URL of the public GitHub REST API."""

DEFAULT_REQUEST_TIMEOUT = 30.0
"""Default timeout in seconds for a single GitHub API request."""

REPOSITORIES_PER_PAGE = 100
"""Number of repositories fetched in the single page requested per user."""

# Display Constants
# -----------------

FIELD_PLACEHOLDER = "--"
"""Rendered in place of a profile field whose value is absent or not yet fetched."""

UNKNOWN_LANGUAGE = "Unknown"
"""Rendered in place of a repository language GitHub could not detect."""
