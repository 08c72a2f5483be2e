"""Project commands -- look up projects, their teams, statistics and pages.

Provides the ``hangar project`` sub-command group::

    hangar project get fancyglow
    hangar project list --category gameplay --limit 10
    hangar project members fancyglow
    hangar project stats fancyglow --from 2024-01-01 --to 2024-01-31
    hangar project page fancyglow docs/config
    hangar project readme fancyglow
"""

from __future__ import annotations

from typing import Optional

import typer

from pyhangar.commands import common
from pyhangar.models import DailyStats
from pyhangar.output import OutputManager

project_app = typer.Typer(no_args_is_help=True, help="Commands for working with projects.")


@project_app.command("get")
def project_get(
    ctx: typer.Context,
    slug: str = typer.Argument(help="Project slug."),
) -> None:
    """Get information about a specific project."""
    state = common.get_state(ctx)
    out = state.output
    with common.handle_errors(out), common.open_client(state.settings) as client:
        project = client.get_project(slug)

    if out.is_json:
        out.print_json(project)
        return
    out.print_fields(
        [
            ("ID", project.id),
            ("Name", project.name),
            ("Slug", project.namespace.slug),
            ("Owner", project.namespace.owner),
            ("Category", project.category),
            ("Description", project.description),
            ("Views", project.stats.views),
            ("Downloads", project.stats.downloads),
            ("Stars", project.stats.stars),
            ("Created", common.fmt_date(project.created_at)),
            ("Last Updated", common.fmt_date(project.last_updated)),
        ]
    )


@project_app.command("list")
def project_list(
    ctx: typer.Context,
    limit: int = typer.Option(25, "--limit", help=common.LIMIT_HELP),
    offset: int = typer.Option(0, "--offset", help=common.OFFSET_HELP),
    category: Optional[str] = typer.Option(None, "--category", help="Filter by category."),
) -> None:
    """List projects."""
    state = common.get_state(ctx)
    out = state.output
    with common.handle_errors(out), common.open_client(state.settings) as client:
        projects = client.list_projects(limit=limit, offset=offset, category=category)

    out.debug(
        f"retrieved projects count={projects.pagination.count} "
        f"limit={projects.pagination.limit} offset={projects.pagination.offset}"
    )
    if out.is_json:
        out.print_json(projects)
        return
    out.print_table(
        ["Name", "Slug", "Category", "Downloads", "Views", "Stars"],
        [
            [p.name, p.namespace.slug, p.category, p.stats.downloads, p.stats.views, p.stats.stars]
            for p in projects.result
        ],
    )
    out.print_total(projects.pagination.count, "projects")


@project_app.command("members")
def project_members(
    ctx: typer.Context,
    slug: str = typer.Argument(help="Project slug."),
    limit: int = typer.Option(25, "--limit", help=common.LIMIT_HELP),
    offset: int = typer.Option(0, "--offset", help=common.OFFSET_HELP),
) -> None:
    """List the members of a project."""
    state = common.get_state(ctx)
    out = state.output
    with common.handle_errors(out), common.open_client(state.settings) as client:
        members = client.get_project_members(slug, limit=limit, offset=offset)

    if out.is_json:
        out.print_json(members)
        return
    out.print_table(
        ["Username", "Roles", "Accepted"],
        [[m.user, m.role_names, m.accepted] for m in members.result],
    )
    out.print_total(members.pagination.count, "members")


@project_app.command("stargazers")
def project_stargazers(
    ctx: typer.Context,
    slug: str = typer.Argument(help="Project slug."),
    limit: int = typer.Option(25, "--limit", help=common.LIMIT_HELP),
    offset: int = typer.Option(0, "--offset", help=common.OFFSET_HELP),
) -> None:
    """List users who starred a project."""
    state = common.get_state(ctx)
    out = state.output
    with common.handle_errors(out), common.open_client(state.settings) as client:
        users = client.get_project_stargazers(slug, limit=limit, offset=offset)

    if out.is_json:
        out.print_json(users)
        return
    out.print_table(["Username", "Projects", "Joined"], common.user_rows(users.result, with_roles=False))
    out.print_total(users.pagination.count, "stargazers")


@project_app.command("watchers")
def project_watchers(
    ctx: typer.Context,
    slug: str = typer.Argument(help="Project slug."),
    limit: int = typer.Option(25, "--limit", help=common.LIMIT_HELP),
    offset: int = typer.Option(0, "--offset", help=common.OFFSET_HELP),
) -> None:
    """List users watching a project."""
    state = common.get_state(ctx)
    out = state.output
    with common.handle_errors(out), common.open_client(state.settings) as client:
        users = client.get_project_watchers(slug, limit=limit, offset=offset)

    if out.is_json:
        out.print_json(users)
        return
    out.print_table(["Username", "Projects", "Joined"], common.user_rows(users.result, with_roles=False))
    out.print_total(users.pagination.count, "watchers")


@project_app.command("stats")
def project_stats(
    ctx: typer.Context,
    slug: str = typer.Argument(help="Project slug."),
    from_date: Optional[str] = typer.Option(None, "--from", help="Start date (YYYY-MM-DD)."),
    to_date: Optional[str] = typer.Option(None, "--to", help="End date (YYYY-MM-DD)."),
) -> None:
    """Show daily download and view statistics of a project."""
    state = common.get_state(ctx)
    with common.handle_errors(state.output), common.open_client(state.settings) as client:
        stats = client.get_project_stats(slug, from_date=from_date, to_date=to_date)
    print_stats(state.output, stats)


def print_stats(out: OutputManager, stats: dict[str, DailyStats]) -> None:
    """Render daily statistics in date order."""
    if out.is_json:
        out.print_json(stats)
        return
    out.print_table(
        ["Date", "Downloads", "Views"],
        [[day, metrics.downloads, metrics.views] for day, metrics in sorted(stats.items())],
    )
    out.print_data(f"\nTotal days: {len(stats)}")


@project_app.command("page")
def project_page(
    ctx: typer.Context,
    slug: str = typer.Argument(help="Project slug."),
    path: Optional[str] = typer.Argument(None, help="Page path (default: home)."),
) -> None:
    """Print a project page as Markdown."""
    state = common.get_state(ctx)
    out = state.output
    with common.handle_errors(out), common.open_client(state.settings) as client:
        page = client.get_project_page(slug, path)

    if out.is_json:
        out.print_json(page)
        return
    out.print_data(f"# {page.name} ({page.slug})\n")
    out.print_data(page.contents)


@project_app.command("readme")
def project_readme(
    ctx: typer.Context,
    slug: str = typer.Argument(help="Project slug."),
) -> None:
    """Print the main page of a project."""
    state = common.get_state(ctx)
    out = state.output
    with common.handle_errors(out), common.open_client(state.settings) as client:
        page = client.get_project_main_page(slug)

    if out.is_json:
        out.print_json(page)
        return
    out.print_data(page.contents)
