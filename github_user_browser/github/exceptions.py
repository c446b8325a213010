"""Contains exceptions raised when fetching data from the GitHub API."""


class FetchError(Exception):
    """Base class for failures of a single GitHub API request."""

    pass


class NetworkError(FetchError):
    """Raised when the request could not be sent or no response was received."""

    pass


class HttpStatusError(FetchError):
    """Raised when the GitHub API answers with an unsuccessful status code."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        """Initializes the exception with the HTTP status code of the response."""
        super().__init__(message or f"GitHub API responded with HTTP status {status_code}")
        self.status_code = status_code


class NotFoundError(HttpStatusError):
    """Raised when the requested resource does not exist, e.g. a deleted account."""

    def __init__(self, message: str | None = None) -> None:
        """Initializes the exception with a 404 status code."""
        super().__init__(404, message or "GitHub API resource not found")


class DecodeError(FetchError):
    """Raised when a response body cannot be decoded into the expected schema."""

    pass
