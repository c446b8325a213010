"""GitHub API gateway backed by the githubkit library."""

from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar

import structlog
from githubkit import Response
from githubkit.exception import RequestError, RequestFailed, RequestTimeout
from pydantic import BaseModel

from github_user_browser.configuration.models import ClientConfig
from github_user_browser.schemas.github import Repository, User, UserDetail
from github_user_browser.utils.constants import REPOSITORIES_PER_PAGE

from .abc import GitHubGatewayBase
from .client import GitHubClient, get_github_client
from .exceptions import DecodeError, HttpStatusError, NetworkError, NotFoundError

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])
M = TypeVar("M", bound=BaseModel)


def translate_fetch_errors(func: F) -> F:
    """Decorator translating githubkit and decoding failures into ``FetchError`` subclasses."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except RequestFailed as exc:
            status_code = exc.response.status_code
            url = getattr(exc.response, "url", None)
            logger.error(
                "GitHub request failed",
                function=func.__name__,
                status_code=status_code,
                url=str(url) if url is not None else None,
            )
            if status_code == 404:
                raise NotFoundError(f"GitHub resource not found in {func.__name__}") from exc
            raise HttpStatusError(status_code, f"GitHub responded with HTTP {status_code} in {func.__name__}") from exc
        except (RequestError, RequestTimeout) as exc:
            logger.error("GitHub request could not be completed", function=func.__name__, error=str(exc))
            raise NetworkError(f"Network failure in {func.__name__}: {exc}") from exc
        except ValueError as exc:
            # Covers both malformed JSON and pydantic.ValidationError.
            logger.error("GitHub response could not be decoded", function=func.__name__, error=str(exc))
            raise DecodeError(f"Unexpected response payload in {func.__name__}: {exc}") from exc

    return wrapper  # type: ignore


def _decode_object(response: Response[Any], model: type[M]) -> M:
    """Decode a JSON object response body into ``model``."""
    return model.model_validate(response.json())


def _decode_list(response: Response[Any], model: type[M]) -> list[M]:
    """Decode a JSON array response body into a list of ``model``, keeping API order."""
    payload = response.json()
    if not isinstance(payload, list):
        raise DecodeError(f"Expected a JSON array for {model.__name__} list, got {type(payload).__name__}")
    return [model.model_validate(item) for item in payload]


class GitHubKitGateway(GitHubGatewayBase):
    """GitHub API gateway backed by the githubkit library."""

    def __init__(self, client: GitHubClient) -> None:
        """Initialize the gateway with an already-initialized client."""
        self.client = client

    @classmethod
    def create(cls, config: ClientConfig) -> Self:
        """Create a new gateway from an explicit client configuration.

        Args:
            config: Base URL, token and timeout of the GitHub client

        Returns:
            Configured GitHubKitGateway instance
        """
        logger.info(
            "Creating client for GitHub instance",
            github_api_url=config.base_url,
            authenticated=config.authenticated,
            timeout=config.timeout,
        )
        return cls(get_github_client(config))

    # Users
    @translate_fetch_errors
    async def list_users(self) -> list[User]:
        """List GitHub users (the first page, in API order)."""
        response = await self.client.rest.users.async_list()
        users = _decode_list(response, User)
        logger.debug("Fetched users", count=len(users))
        return users

    @translate_fetch_errors
    async def get_user_detail(self, login: str) -> UserDetail:
        """Get the full profile of a GitHub user."""
        response = await self.client.rest.users.async_get_by_username(username=login)
        return _decode_object(response, UserDetail)

    # Repositories
    @translate_fetch_errors
    async def list_user_repositories(self, login: str) -> list[Repository]:
        """List up to one page of repositories owned by a GitHub user."""
        response = await self.client.rest.repos.async_list_for_user(username=login, per_page=REPOSITORIES_PER_PAGE)
        repositories = _decode_list(response, Repository)
        logger.debug("Fetched repositories", login=login, count=len(repositories))
        return repositories

    @translate_fetch_errors
    async def list_repository_languages(self, owner: str, repo: str) -> dict[str, int]:
        """List the languages of a repository with the number of bytes written in each."""
        response = await self.client.rest.repos.async_list_languages(owner=owner, repo=repo)
        payload = response.json()
        if not isinstance(payload, dict):
            raise DecodeError(f"Expected a JSON object of languages, got {type(payload).__name__}")
        return {str(language): int(size) for language, size in payload.items()}
