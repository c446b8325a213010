"""Sets up the githubkit client from an explicit client configuration."""

from typing import TypeAlias

import structlog
from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy, UnauthAuthStrategy

from github_user_browser.configuration.models import ClientConfig

logger = structlog.get_logger(__name__)

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy] | GitHub[UnauthAuthStrategy]


def get_github_client(config: ClientConfig) -> GitHubClient:
    """Returns a GitHub client built from the given configuration.

    The token, when configured, is attached to every request. Without one the
    client is unauthenticated and GitHub answers protected requests with
    401 or 403. Automatic retries are disabled so that every failure reaches
    the caller.
    """
    auth: TokenAuthStrategy | UnauthAuthStrategy
    if config.auth_token:
        auth = TokenAuthStrategy(config.auth_token)
    else:
        logger.warning("No GitHub token configured, using unauthenticated requests", base_url=config.base_url)
        auth = UnauthAuthStrategy()
    # Disable HTTP caching to always get fresh data
    return GitHub(
        auth=auth,
        base_url=config.base_url,
        timeout=config.timeout,
        http_cache=False,
        auto_retry=False,
    )
