"""User commands -- look up accounts and the projects they follow.

Provides the ``hangar user`` sub-command group::

    hangar user get kennytv
    hangar user list paper --limit 10
    hangar user starred kennytv
    hangar user watching kennytv
    hangar user pinned kennytv
"""

from __future__ import annotations

from typing import Optional

import typer

from pyhangar.commands import common
from pyhangar.models import ProjectList
from pyhangar.output import OutputManager

user_app = typer.Typer(no_args_is_help=True, help="Commands for working with users.")


@user_app.command("get")
def user_get(
    ctx: typer.Context,
    username: str = typer.Argument(help="Username."),
) -> None:
    """Get information about a specific user."""
    state = common.get_state(ctx)
    out = state.output
    with common.handle_errors(out), common.open_client(state.settings) as client:
        user = client.get_user(username)

    if out.is_json:
        out.print_json(user)
        return
    fields: list[tuple[str, object]] = [
        ("Username", user.name),
        ("Tagline", user.tagline),
        ("Joined", common.fmt_date(user.join_date)),
        ("Projects", user.project_count),
        ("Locked", user.locked),
    ]
    if user.roles:
        fields.append(("Roles", user.role_names))
    out.print_fields(fields)


@user_app.command("list")
def user_list(
    ctx: typer.Context,
    query: Optional[str] = typer.Argument(None, help="Search query."),
    limit: int = typer.Option(25, "--limit", help=common.LIMIT_HELP),
    offset: int = typer.Option(0, "--offset", help=common.OFFSET_HELP),
) -> None:
    """List or search users."""
    state = common.get_state(ctx)
    out = state.output
    with common.handle_errors(out), common.open_client(state.settings) as client:
        users = client.list_users(query, limit=limit, offset=offset)

    if out.is_json:
        out.print_json(users)
        return
    out.print_table(["Username", "Projects", "Joined", "Roles"], common.user_rows(users.result))
    out.print_total(users.pagination.count, "users")


@user_app.command("starred")
def user_starred(
    ctx: typer.Context,
    username: str = typer.Argument(help="Username."),
    limit: int = typer.Option(25, "--limit", help=common.LIMIT_HELP),
    offset: int = typer.Option(0, "--offset", help=common.OFFSET_HELP),
) -> None:
    """List projects starred by a user."""
    state = common.get_state(ctx)
    with common.handle_errors(state.output), common.open_client(state.settings) as client:
        projects = client.get_user_starred(username, limit=limit, offset=offset)
    _print_projects(state.output, projects, "Stars")


@user_app.command("watching")
def user_watching(
    ctx: typer.Context,
    username: str = typer.Argument(help="Username."),
    limit: int = typer.Option(25, "--limit", help=common.LIMIT_HELP),
    offset: int = typer.Option(0, "--offset", help=common.OFFSET_HELP),
) -> None:
    """List projects watched by a user."""
    state = common.get_state(ctx)
    with common.handle_errors(state.output), common.open_client(state.settings) as client:
        projects = client.get_user_watching(username, limit=limit, offset=offset)
    _print_projects(state.output, projects, "Watchers")


@user_app.command("pinned")
def user_pinned(
    ctx: typer.Context,
    username: str = typer.Argument(help="Username."),
) -> None:
    """List projects pinned on a user's profile."""
    state = common.get_state(ctx)
    with common.handle_errors(state.output), common.open_client(state.settings) as client:
        projects = client.get_user_pinned(username)
    _print_projects(state.output, projects, "Stars")


def _print_projects(out: OutputManager, projects: ProjectList, counter: str) -> None:
    if out.is_json:
        out.print_json(projects)
        return
    rows = []
    for p in projects.result:
        last = p.stats.watchers if counter == "Watchers" else p.stats.stars
        rows.append([p.name, p.namespace.slug, p.category, p.stats.downloads, last])
    out.print_table(["Name", "Slug", "Category", "Downloads", counter], rows)
    out.print_total(projects.pagination.count, "projects")
