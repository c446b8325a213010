"""Models for configuration between CLI arguments and environment variables."""

from dataclasses import dataclass

from github_user_browser.utils.constants import DEFAULT_GITHUB_API_URL, DEFAULT_REQUEST_TIMEOUT


@dataclass(frozen=True)
class ClientConfig:
    """Configuration used to construct the GitHub API client."""

    base_url: str = DEFAULT_GITHUB_API_URL
    auth_token: str | None = None
    timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def authenticated(self) -> bool:
        """Whether a token will be attached to every request."""
        return bool(self.auth_token)


@dataclass(frozen=True)
class BaseConfig:
    """Configuration class for the GitHub User Browser CLI."""

    debug: bool
    client: ClientConfig
