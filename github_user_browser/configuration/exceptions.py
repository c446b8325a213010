"""Contains exceptions raised when reconciling application configuration."""


class ConfigurationError(Exception):
    """Raised when the reconciled configuration is unusable."""

    pass


class InvalidTimeoutError(ConfigurationError):
    """Raised when the configured request timeout is not a positive number."""

    def __init__(self, timeout: float) -> None:
        """Initializes the exception with the rejected timeout value."""
        super().__init__(f"Request timeout must be a positive number of seconds, got {timeout}")
        self.timeout = timeout


class InvalidAPIURLError(ConfigurationError):
    """Raised when the configured GitHub API URL is not an HTTP(S) URL."""

    def __init__(self, url: str) -> None:
        """Initializes the exception with the rejected URL."""
        super().__init__(f"GitHub API URL must start with http:// or https://, got {url!r}")
        self.url = url
