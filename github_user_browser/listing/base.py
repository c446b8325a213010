"""Shared machinery of the list controllers: load state, generations, projections and tasks."""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Coroutine, Generic, Self, TypeVar

import structlog

from github_user_browser.github.abc import GitHubGatewayBase
from github_user_browser.github.exceptions import FetchError

logger = structlog.get_logger(__name__)

T = TypeVar("T")
P = TypeVar("P")

ProjectionListener = Callable[[tuple[Any, ...]], None]


class LoadState(str, Enum):
    """Enum for the lifecycle of a list controller's base list."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadResult(Generic[T]):
    """Outcome of a top-level fetch, tagged with the generation of the load that issued it."""

    generation: int
    items: tuple[T, ...] = ()
    error: FetchError | None = None


class ControllerClosedError(RuntimeError):
    """Raised when a load is requested from a controller that has been closed."""

    pass


class ListController(ABC, Generic[T, P]):
    """Base class for controllers owning a base list and its filtered projection.

    Every ``load`` is tagged with a new generation. Results are applied only
    when their generation is still the latest, so a slow response from a
    superseded load never overwrites a newer list. Background tasks are owned
    by the controller and cancelled by ``close``.
    """

    #: Name used in log events and failure messages.
    subject = "items"

    def __init__(self, gateway: GitHubGatewayBase) -> None:
        """Initialize an idle controller fetching through ``gateway``."""
        self._gateway = gateway
        self._generation = 0
        self._replaced_generation = 0
        self._state = LoadState.IDLE
        self._error: str | None = None
        self._base: tuple[T, ...] = ()
        self._query = ""
        self._projection: tuple[P, ...] = ()
        self._listeners: list[ProjectionListener] = []
        self._tasks: set[asyncio.Task[Any]] = set()
        self._closed = False

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def state(self) -> LoadState:
        """Current load state."""
        return self._state

    @property
    def error(self) -> str | None:
        """User-visible message describing the last failed load, if the controller failed."""
        return self._error

    @property
    def generation(self) -> int:
        """Generation of the most recent load."""
        return self._generation

    @property
    def base_list(self) -> tuple[T, ...]:
        """The unfiltered list in API response order."""
        return self._base

    @property
    def query(self) -> str:
        """Current text query."""
        return self._query

    @property
    def projection(self) -> tuple[P, ...]:
        """The filtered, ordered view of the base list currently eligible for display."""
        return self._projection

    @property
    def count(self) -> int:
        """Number of entries in the projection."""
        return len(self._projection)

    def subscribe(self, listener: ProjectionListener) -> Callable[[], None]:
        """Call ``listener`` with the new projection whenever it is recomputed.

        Returns a callable removing the subscription.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_query(self, query: str) -> None:
        """Update the text query and recompute the projection."""
        self._query = query
        self._refresh()

    async def close(self) -> None:
        """Cancel every background task owned by the controller."""
        self._closed = True
        tasks = [task for task in self._tasks if not task.done()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.debug("Closed list controller", subject=self.subject, cancelled_tasks=len(tasks))

    # Hooks
    @abstractmethod
    def _project(self) -> tuple[P, ...]:
        """Compute the projection from the base list and the filter state."""
        pass

    def _on_base_replaced(self) -> None:
        """Called after a successful load replaced the base list, before the projection is recomputed."""
        pass

    # Internals
    def _refresh(self) -> None:
        self._projection = self._project()
        for listener in list(self._listeners):
            listener(self._projection)

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _fetch_tagged(self, generation: int, fetch: Callable[[], Awaitable[list[T]]]) -> LoadResult[T]:
        try:
            items = await fetch()
        except FetchError as exc:
            return LoadResult(generation=generation, error=exc)
        return LoadResult(generation=generation, items=tuple(items))

    async def _load(self, fetch: Callable[[], Awaitable[list[T]]], **log_context: Any) -> bool:
        """Run a generation-tagged top-level fetch and apply its result.

        Returns True when the result replaced the base list.
        """
        if self._closed:
            raise ControllerClosedError(f"Cannot load {self.subject} from a closed controller")
        self._generation += 1
        generation = self._generation
        self._state = LoadState.LOADING
        self._error = None
        logger.info(f"Loading {self.subject}", generation=generation, **log_context)

        task = self._spawn(self._fetch_tagged(generation, fetch))
        # Applied by the task itself, even if the caller stops waiting.
        task.add_done_callback(self._deliver)
        await asyncio.wait({task})
        exc = None if task.cancelled() else task.exception()
        if exc is not None:
            raise exc
        return self._replaced_generation == generation

    def _deliver(self, task: "asyncio.Task[LoadResult[T]]") -> None:
        # Anything but FetchError is a bug and is raised by _load instead.
        if task.cancelled() or task.exception() is not None:
            return
        self._receive(task.result())

    def _receive(self, result: LoadResult[T]) -> bool:
        if result.generation != self._generation:
            logger.debug(
                f"Discarding stale {self.subject} response",
                generation=result.generation,
                latest_generation=self._generation,
            )
            return False

        if result.error is not None:
            self._state = LoadState.FAILED
            self._error = f"Could not load {self.subject}: {result.error}"
            self._base = ()
            logger.error(f"Failed to load {self.subject}", generation=result.generation, error=str(result.error))
            self._refresh()
            return False

        self._base = result.items
        self._state = LoadState.READY
        self._replaced_generation = result.generation
        self._on_base_replaced()
        self._refresh()
        logger.info(f"Loaded {self.subject}", generation=result.generation, count=len(self._base), visible=self.count)
        return True
