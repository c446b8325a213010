"""List controller for GitHub users, with lazy per-user detail enrichment."""

import asyncio
import functools
from dataclasses import dataclass
from typing import Any

import structlog

from github_user_browser.github.abc import GitHubGatewayBase
from github_user_browser.github.exceptions import FetchError
from github_user_browser.listing.base import ListController, LoadState
from github_user_browser.listing.enrichment import EnrichmentCache
from github_user_browser.listing.filters import filter_by_text
from github_user_browser.schemas.github import User, UserDetail

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class UserProfile:
    """A user merged with its detail, when the detail has been fetched.

    Detail fields are None until the detail arrives.
    """

    user: User
    detail: UserDetail | None = None

    @property
    def login(self) -> str:
        return self.user.login

    @property
    def avatar_url(self) -> str | None:
        return self.user.avatar_url

    @property
    def has_detail(self) -> bool:
        return self.detail is not None

    @property
    def name(self) -> str | None:
        return self.detail.name if self.detail else None

    @property
    def email(self) -> str | None:
        return self.detail.email if self.detail else None

    @property
    def company(self) -> str | None:
        return self.detail.company if self.detail else None

    @property
    def location(self) -> str | None:
        return self.detail.location if self.detail else None

    @property
    def followers(self) -> int | None:
        return self.detail.followers if self.detail else None

    @property
    def following(self) -> int | None:
        return self.detail.following if self.detail else None


def _user_login(user: User) -> str:
    return user.login


class UserListController(ListController[User, UserProfile]):
    """Owns the user list, its text query and the enrichment of its rows.

    After every successful load, each listed user whose detail is neither
    cached nor being fetched gets a background detail request. Arriving
    details are stored in the cache and merged into the projection without
    changing its order. A failed detail request leaves the row without detail
    and is retried by the next load only.
    """

    subject = "users"

    def __init__(self, gateway: GitHubGatewayBase, cache: EnrichmentCache | None = None) -> None:
        """Initialize the controller; ``cache`` may be shared between controllers of a session."""
        super().__init__(gateway)
        self._cache = cache if cache is not None else EnrichmentCache()
        self._enrichment_tasks: dict[str, asyncio.Task[Any]] = {}

    @property
    def cache(self) -> EnrichmentCache:
        return self._cache

    async def load(self) -> LoadState:
        """Fetch the user list, reset the query and start enriching unseen users."""
        await self._load(self._gateway.list_users)
        return self._state

    def select(self, login: str) -> UserProfile | None:
        """Return the merged record of a listed user, or None if ``login`` is not listed."""
        for user in self._base:
            if user.login == login:
                return UserProfile(user=user, detail=self._cache.get(login))
        return None

    async def wait_for_detail(self, login: str) -> UserProfile | None:
        """Wait for the pending detail request of ``login`` only, then select it."""
        task = self._enrichment_tasks.get(login)
        if task is not None and not task.done():
            await asyncio.wait({task})
        return self.select(login)

    async def wait_for_enrichment(self) -> None:
        """Wait until every detail request started so far has resolved."""
        while True:
            pending = {task for task in self._enrichment_tasks.values() if not task.done()}
            if not pending:
                return
            await asyncio.wait(pending)

    def _on_base_replaced(self) -> None:
        self._query = ""
        self._schedule_enrichment()

    def _project(self) -> tuple[UserProfile, ...]:
        visible = filter_by_text(self._base, self._query, key=_user_login)
        return tuple(UserProfile(user=user, detail=self._cache.get(user.login)) for user in visible)

    def _schedule_enrichment(self) -> None:
        scheduled = 0
        for user in self._base:
            if self._cache.has(user.login):
                continue
            if not self._cache.begin_fetch(user.login):
                continue
            task = self._spawn(self._enrich(user.login))
            self._enrichment_tasks[user.login] = task
            task.add_done_callback(functools.partial(self._finish_enrichment, user.login))
            scheduled += 1
        logger.debug("Scheduled user detail requests", count=scheduled, cached=len(self._cache))

    def _finish_enrichment(self, login: str, task: asyncio.Task[Any]) -> None:
        if self._enrichment_tasks.get(login) is task:
            del self._enrichment_tasks[login]
        # Cancelled or crashed requests never reach store() or release().
        if task.cancelled():
            self._cache.release(login)
            return
        exc = task.exception()
        if exc is not None:
            self._cache.release(login)
            logger.error("User detail request crashed", login=login, error=str(exc), error_type=type(exc).__name__)

    async def _enrich(self, login: str) -> None:
        try:
            detail = await self._gateway.get_user_detail(login)
        except FetchError as exc:
            self._cache.release(login)
            logger.warning("Failed to fetch user detail", login=login, error=str(exc), error_type=type(exc).__name__)
            return
        self._cache.store(login, detail)
        if any(user.login == login for user in self._base):
            self._refresh()
