"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio

import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from github_user_browser.configuration.exceptions import ConfigurationError
from github_user_browser.configuration.models import BaseConfig
from github_user_browser.configuration.reconcile import reconcile_base_configuration
from github_user_browser.github.adapter import GitHubKitGateway
from github_user_browser.github.exceptions import FetchError
from github_user_browser.listing.base import ListController, LoadState
from github_user_browser.listing.filters import RepositoryCategory
from github_user_browser.listing.repositories import RepositoryListController
from github_user_browser.listing.users import UserListController, UserProfile
from github_user_browser.schemas.github import Repository
from github_user_browser.utils.display import field_or_placeholder, language_label, nonzero_count, visibility_label
from github_user_browser.utils.github import split_repository_full_name
from github_user_browser.utils.log_config import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Browse GitHub users and their repositories.")


@typer_app.callback()
def main_callback(
    ctx: typer.Context,
    github_api_url: Annotated[str | None, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = None,
    github_pat_token: Annotated[str | None, Option(envvar="GITHUB_PAT_TOKEN", help="GitHub Personal Access Token.")] = None,
    timeout: Annotated[float | None, Option(envvar="GITHUB_TIMEOUT", help="Timeout in seconds of a single GitHub request.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Reconcile the configuration shared by every command."""
    try:
        config = asyncio.run(
            reconcile_base_configuration(
                cli_debug=True if debug else None,
                cli_github_api_url=github_api_url,
                cli_github_pat_token=github_pat_token,
                cli_timeout=timeout,
            )
        )
    except ConfigurationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(1) from e
    configure_logging(config.debug)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def _exit_if_failed(controller: ListController) -> None:
    """Print the controller's failure message and exit when its last load failed."""
    if controller.state is LoadState.FAILED:
        typer.echo(controller.error, err=True)
        raise typer.Exit(1)


def format_user_row(profile: UserProfile) -> str:
    """Render one row of the user list, with placeholders for missing detail."""
    columns = [
        profile.login,
        profile.name or profile.login,
        field_or_placeholder(profile.email),
        field_or_placeholder(profile.company),
        field_or_placeholder(profile.location),
    ]
    return "\t".join(columns)


def format_repository_row(repository: Repository) -> str:
    """Render one row of the repository list, hiding zero counters and absent badges."""
    columns = [repository.full_name, language_label(repository)]
    for label, count in (
        ("stars", repository.stargazers_count),
        ("issues", repository.open_issues_count),
        ("watchers", repository.watchers),
    ):
        rendered = nonzero_count(count)
        if rendered is not None:
            columns.append(f"{label}={rendered}")
    badge = visibility_label(repository)
    if badge is not None:
        columns.append(f"[{badge}]")
    if repository.description:
        columns.append(repository.description)
    return "\t".join(columns)


@typer_app.command(name="users")
def users_cli(
    ctx: typer.Context,
    query: Annotated[str, Option("--query", "-q", help="Only show users whose login contains this text.")] = "",
    details: Annotated[bool, Option("--details/--no-details", help="Fetch name, email, company and location of each user.")] = True,
) -> None:
    """List GitHub users."""
    config: BaseConfig = ctx.obj["config"]

    async def list_users() -> None:
        gateway = GitHubKitGateway.create(config.client)
        async with UserListController(gateway) as controller:
            await controller.load()
            _exit_if_failed(controller)
            if details:
                await controller.wait_for_enrichment()
            controller.set_query(query)
            for profile in controller.projection:
                typer.echo(format_user_row(profile))

    asyncio.run(list_users())


# --- Add a new Typer group for commands about a single user ---
user_app = typer.Typer(help="Commands about a single GitHub user")


def user_callback(
    ctx: typer.Context,
    login: Annotated[str, Argument(help="Login of the GitHub user.")],
) -> None:
    """Set the user for the current context."""
    ctx.ensure_object(dict)
    ctx.obj["login"] = login


user_app.callback()(user_callback)


@user_app.command(name="profile")
def profile_cli(ctx: typer.Context) -> None:
    """Show the profile of a user picked from the user list."""
    config: BaseConfig = ctx.obj["config"]
    login: str = ctx.obj["login"]

    async def show_profile() -> None:
        gateway = GitHubKitGateway.create(config.client)
        async with UserListController(gateway) as controller:
            await controller.load()
            _exit_if_failed(controller)
            profile = await controller.wait_for_detail(login)
            if profile is None:
                typer.echo(f"User '{login}' is not part of the user list.", err=True)
                raise typer.Exit(1)
            typer.echo(f"Login: {profile.login}")
            typer.echo(f"Name: {profile.name or ''}")
            typer.echo(f"Followers: {field_or_placeholder(profile.followers)}")
            typer.echo(f"Following: {field_or_placeholder(profile.following)}")

    asyncio.run(show_profile())


@user_app.command(name="repos")
def repos_cli(
    ctx: typer.Context,
    category: Annotated[
        RepositoryCategory,
        Option("--category", "-c", case_sensitive=False, help="Only show repositories of this category."),
    ] = RepositoryCategory.ALL,
    query: Annotated[str, Option("--query", "-q", help="Only show repositories whose name contains this text.")] = "",
) -> None:
    """List the repositories of a user."""
    config: BaseConfig = ctx.obj["config"]
    login: str = ctx.obj["login"]

    async def list_repositories() -> None:
        gateway = GitHubKitGateway.create(config.client)
        async with RepositoryListController(gateway, category=category) as controller:
            controller.set_query(query)
            await controller.load(login)
            _exit_if_failed(controller)
            typer.echo(f"{category.value} repositories: {controller.count}")
            for repository in controller.projection:
                typer.echo(format_repository_row(repository))

    asyncio.run(list_repositories())


# --- Register the user_app as a sub-app of the main Typer app ---
typer_app.add_typer(user_app, name="user")


@typer_app.command(name="languages")
def languages_cli(
    ctx: typer.Context,
    repo: Annotated[str, Argument(help="Repository name (owner/repo).")],
) -> None:
    """Show the languages of a repository, largest first."""
    config: BaseConfig = ctx.obj["config"]
    try:
        owner, repo_name = split_repository_full_name(repo)
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1) from e

    async def list_languages() -> None:
        gateway = GitHubKitGateway.create(config.client)
        try:
            languages = await gateway.list_repository_languages(owner, repo_name)
        except FetchError as e:
            typer.echo(f"Could not load languages: {e}", err=True)
            raise typer.Exit(1) from e
        total = sum(languages.values())
        for language, size in sorted(languages.items(), key=lambda item: item[1], reverse=True):
            share = f"{size / total:.1%}" if total else "0.0%"
            typer.echo(f"{language}\t{size}\t{share}")

    asyncio.run(list_languages())


def main() -> None:
    """Entry point of the ``github-user-browser`` console script."""
    typer_app()


if __name__ == "__main__":
    main()
