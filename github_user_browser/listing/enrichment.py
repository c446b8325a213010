"""Session cache of user details fetched lazily after the user list is shown."""

import threading

import structlog

from github_user_browser.schemas.github import UserDetail

logger = structlog.get_logger(__name__)


class EnrichmentCache:
    """Append-only mapping from login to user detail, with per-login fetch claims.

    A login is claimed with ``begin_fetch`` before its detail is requested and
    the claim is released by ``store`` (on success) or ``release`` (on
    failure). While a claim is held, or once a detail is stored, further
    claims for that login are refused, so at most one detail request per login
    is ever in flight.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._details: dict[str, UserDetail] = {}
        self._in_flight: set[str] = set()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._details)

    def __contains__(self, login: object) -> bool:
        return login in self._details

    def has(self, login: str) -> bool:
        """Whether the detail of ``login`` has been fetched."""
        return login in self._details

    def get(self, login: str) -> UserDetail | None:
        """Return the fetched detail of ``login``, if any."""
        return self._details.get(login)

    def is_in_flight(self, login: str) -> bool:
        """Whether a detail request for ``login`` is currently claimed."""
        return login in self._in_flight

    def begin_fetch(self, login: str) -> bool:
        """Claim the right to fetch the detail of ``login``.

        Returns True exactly once per login until the claim is released, and
        False while a fetch is in flight or after the detail has been stored.
        """
        with self._lock:
            if login in self._details or login in self._in_flight:
                return False
            self._in_flight.add(login)
            return True

    def store(self, login: str, detail: UserDetail) -> None:
        """Record the fetched detail of ``login`` and release its claim."""
        with self._lock:
            existing = self._details.get(login)
            if existing is not None and existing != detail:
                # Entries are never invalidated within a session.
                logger.debug("Ignoring differing detail for already cached user", login=login)
            else:
                self._details[login] = detail
            self._in_flight.discard(login)

    def release(self, login: str) -> None:
        """Release the claim on ``login`` without storing a detail."""
        with self._lock:
            self._in_flight.discard(login)
