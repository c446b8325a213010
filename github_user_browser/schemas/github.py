"""Pydantic schemas for the GitHub REST API entities read by the listing pipeline.

Only the fields the listing logic reads are declared. Every other field of
the API payload is kept as extra data so it can be passed through untouched.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class GitHubEntity(BaseModel):
    """Base model for GitHub API entities.

    Entities are immutable snapshots of a single fetch. Undeclared fields of
    the payload are retained and available through ``passthrough``.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    @property
    def passthrough(self) -> dict[str, Any]:
        """Return the API fields carried but not interpreted by this model."""
        return dict(self.model_extra or {})


class User(GitHubEntity):
    """Pydantic model for an entry of the GitHub user list."""

    login: str
    id: int
    avatar_url: str | None = None


class UserDetail(GitHubEntity):
    """Pydantic model for the full profile of a single GitHub user."""

    login: str
    name: str | None = None
    email: str | None = None
    company: str | None = None
    location: str | None = None
    followers: int = 0
    following: int = 0


class Repository(GitHubEntity):
    """Pydantic model for a repository owned by a GitHub user."""

    id: int
    name: str
    full_name: str
    description: str | None = None
    language: str | None = None
    stargazers_count: int = 0
    open_issues_count: int = 0
    watchers: int = 0
    visibility: str = "public"
    archived: bool = False
    fork: bool = False
    private: bool = False
