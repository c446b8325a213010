"""Base ABC for GitHub API gateways."""

from abc import ABC, abstractmethod

from github_user_browser.schemas.github import Repository, User, UserDetail


class GitHubGatewayBase(ABC):
    """Base ABC for GitHub API gateways.

    Implementations raise ``FetchError`` subclasses on failure and never retry.
    """

    # Users
    @abstractmethod
    async def list_users(self) -> list[User]:
        """List GitHub users."""
        pass

    @abstractmethod
    async def get_user_detail(self, login: str) -> UserDetail:
        """Get the full profile of a GitHub user."""
        pass

    # Repositories
    @abstractmethod
    async def list_user_repositories(self, login: str) -> list[Repository]:
        """List the repositories of a GitHub user (a single page)."""
        pass

    @abstractmethod
    async def list_repository_languages(self, owner: str, repo: str) -> dict[str, int]:
        """List the languages of a repository with the number of bytes written in each."""
        pass
