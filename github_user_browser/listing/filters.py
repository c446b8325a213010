"""Pure filtering functions shared by the user and repository list controllers."""

from enum import Enum
from typing import Callable, Iterable, TypeVar

from github_user_browser.schemas.github import Repository

T = TypeVar("T")


class RepositoryCategory(str, Enum):
    """Enum for the repository categories a list can be narrowed to."""

    ALL = "All"
    PUBLIC = "Public"
    FORKS = "Forks"
    ARCHIVED = "Archived"

    @classmethod
    def parse(cls, value: "RepositoryCategory | str") -> "RepositoryCategory":
        """Parse a category from an enum member, its display name or its member name."""
        if isinstance(value, cls):
            return value
        normalized = value.strip().lower()
        for category in cls:
            if normalized in (category.value.lower(), category.name.lower()):
                return category
        raise ValueError(f"Unknown repository category: {value!r}")


def filter_by_text(items: Iterable[T], query: str, key: Callable[[T], str]) -> list[T]:
    """Keep the items whose key contains ``query``, ignoring case.

    A blank query keeps every item. Any other query is matched as typed,
    surrounding whitespace included. Relative order is preserved.
    """
    if not query.strip():
        return list(items)
    needle = query.lower()
    return [item for item in items if needle in key(item).lower()]


def matches_category(repository: Repository, category: RepositoryCategory) -> bool:
    """Whether a repository belongs to a category.

    Categories overlap: an archived public repository is both ``PUBLIC`` and
    ``ARCHIVED``.
    """
    if category is RepositoryCategory.PUBLIC:
        return not repository.private
    if category is RepositoryCategory.FORKS:
        return repository.fork
    if category is RepositoryCategory.ARCHIVED:
        return repository.archived
    return True


def filter_by_category(items: Iterable[Repository], category: RepositoryCategory) -> list[Repository]:
    """Keep the repositories belonging to ``category``, preserving order."""
    return [repository for repository in items if matches_category(repository, category)]
