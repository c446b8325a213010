"""List controller for the repositories of a single GitHub user."""

import structlog

from github_user_browser.github.abc import GitHubGatewayBase
from github_user_browser.listing.base import ListController
from github_user_browser.listing.filters import RepositoryCategory, filter_by_category, filter_by_text
from github_user_browser.schemas.github import Repository

logger = structlog.get_logger(__name__)


def _repository_name(repository: Repository) -> str:
    return repository.name


class RepositoryListController(ListController[Repository, Repository]):
    """Owns a user's repository list, its category filter and its text query.

    Category and text query compose: a repository is visible only when it
    belongs to the category and its name matches the query. Both are kept
    across loads.
    """

    subject = "repositories"

    def __init__(self, gateway: GitHubGatewayBase, category: RepositoryCategory | str = RepositoryCategory.ALL) -> None:
        super().__init__(gateway)
        self._category = RepositoryCategory.parse(category)
        self._login: str | None = None

    @property
    def login(self) -> str | None:
        """Login of the user whose repositories were requested last."""
        return self._login

    @property
    def category(self) -> RepositoryCategory:
        return self._category

    async def load(self, login: str) -> int:
        """Fetch the repositories of ``login`` and return the number of visible ones."""
        self._login = login
        await self._load(lambda: self._gateway.list_user_repositories(login), login=login)
        return self.count

    def set_category(self, category: RepositoryCategory | str) -> None:
        """Change the category and recompute the projection from the base list."""
        self._category = RepositoryCategory.parse(category)
        logger.debug("Repository category changed", category=self._category.value, login=self._login)
        self._refresh()

    def _project(self) -> tuple[Repository, ...]:
        in_category = filter_by_category(self._base, self._category)
        return tuple(filter_by_text(in_category, self._query, key=_repository_name))
