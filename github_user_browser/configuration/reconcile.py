"""Reconciles configuration between CLI arguments and environment variables."""

from github_user_browser.configuration.env import Settings
from github_user_browser.configuration.exceptions import InvalidAPIURLError, InvalidTimeoutError
from github_user_browser.configuration.models import BaseConfig, ClientConfig


async def reconcile_client_configuration(
    cli_github_api_url: str | None,
    cli_github_pat_token: str | None,
    cli_timeout: float | None,
    settings: Settings | None = None,
) -> ClientConfig:
    """Reconciles the GitHub client configuration.

    Values provided on the command line take precedence over values found in
    the environment or the ``.env`` file.

    Args:
        cli_github_api_url (str | None): The GitHub API URL from the command line.
        cli_github_pat_token (str | None): The GitHub PAT token from the command line.
        cli_timeout (float | None): The request timeout in seconds from the command line.
        settings (Settings | None): Environment settings; loaded when omitted.

    Raises:
        InvalidAPIURLError: If the resulting API URL is not an HTTP(S) URL.
        InvalidTimeoutError: If the resulting timeout is not positive.

    Returns:
        ClientConfig: The configuration used to construct the GitHub client.
    """
    if settings is None:
        settings = Settings()

    base_url = cli_github_api_url or settings.GITHUB_API_URL
    if not base_url.startswith(("http://", "https://")):
        raise InvalidAPIURLError(base_url)

    timeout = cli_timeout if cli_timeout is not None else settings.GITHUB_TIMEOUT
    if timeout <= 0:
        raise InvalidTimeoutError(timeout)

    # An empty token means "unauthenticated", same as an absent one.
    auth_token = cli_github_pat_token or settings.GITHUB_PAT_TOKEN or None

    return ClientConfig(base_url=base_url.rstrip("/"), auth_token=auth_token, timeout=timeout)


async def reconcile_base_configuration(
    cli_debug: bool | None,
    cli_github_api_url: str | None,
    cli_github_pat_token: str | None,
    cli_timeout: float | None,
    settings: Settings | None = None,
) -> BaseConfig:
    """Reconciles the application-wide configuration used by every CLI command."""
    if settings is None:
        settings = Settings()
    client = await reconcile_client_configuration(
        cli_github_api_url=cli_github_api_url,
        cli_github_pat_token=cli_github_pat_token,
        cli_timeout=cli_timeout,
        settings=settings,
    )
    debug = cli_debug if cli_debug is not None else settings.DEBUG
    return BaseConfig(debug=debug, client=client)
