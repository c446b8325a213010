"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from github_user_browser.utils.constants import DEFAULT_GITHUB_API_URL, DEFAULT_REQUEST_TIMEOUT


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # GitHub API settings
    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL
    GITHUB_TIMEOUT: float = DEFAULT_REQUEST_TIMEOUT

    # GitHub PAT settings
    GITHUB_PAT_TOKEN: str | None = None
