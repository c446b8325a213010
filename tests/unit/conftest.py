"""Fixtures for unit tests."""

from typing import Any, Callable, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from github_user_browser.github.abc import GitHubGatewayBase
from github_user_browser.schemas.github import Repository, User, UserDetail


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_user() -> Callable[..., User]:
    """Factory for User models with sequential ids."""
    counter = {"id": 0}

    def _make(login: str, **fields: Any) -> User:
        counter["id"] += 1
        payload: dict[str, Any] = {"login": login, "id": counter["id"], "avatar_url": f"https://avatars.example/{login}"}
        payload.update(fields)
        return User.model_validate(payload)

    return _make


@pytest.fixture
def make_detail() -> Callable[..., UserDetail]:
    """Factory for UserDetail models."""

    def _make(login: str, **fields: Any) -> UserDetail:
        return UserDetail.model_validate({"login": login, **fields})

    return _make


@pytest.fixture
def make_repository() -> Callable[..., Repository]:
    """Factory for Repository models with sequential ids."""
    counter = {"id": 0}

    def _make(name: str, owner: str = "octocat", **fields: Any) -> Repository:
        counter["id"] += 1
        payload: dict[str, Any] = {"id": counter["id"], "name": name, "full_name": f"{owner}/{name}"}
        payload.update(fields)
        return Repository.model_validate(payload)

    return _make


@pytest.fixture
def gateway() -> MagicMock:
    """A gateway whose request methods are AsyncMocks returning empty results."""
    mock = MagicMock(spec=GitHubGatewayBase)
    mock.list_users = AsyncMock(return_value=[])
    mock.get_user_detail = AsyncMock()
    mock.list_user_repositories = AsyncMock(return_value=[])
    mock.list_repository_languages = AsyncMock(return_value={})
    return mock
