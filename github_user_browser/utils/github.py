"""Contains utility functions for GitHub identifiers."""


def split_repository_full_name(full_name: str) -> tuple[str, str]:
    """Splits a repository full name ('owner/repo') into owner and repository."""
    parts = full_name.strip().strip("/").split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Repository must be in the format 'owner/repo' with no extra parts.")
    owner, repository = parts
    return owner, repository
