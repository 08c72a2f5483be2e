"""Version commands -- inspect releases and resolve download URLs.

Provides the ``hangar version`` sub-command group::

    hangar version list fancyglow
    hangar version download-url fancyglow 1.2.0 --platform VELOCITY
    hangar version get-by-id 12345
    hangar version find-by-hash <sha256>
    hangar version latest fancyglow --channel Release
    hangar version stats fancyglow 1.2.0

Commands that need the project owner (``list`` without ``--owner`` and
``download-url``) look the project up first to discover it.
"""

from __future__ import annotations

from typing import Optional

import typer

from pyhangar.commands import common
from pyhangar.commands.project import print_stats
from pyhangar.models import DEFAULT_PLATFORM, PLATFORMS

_PLATFORM_NAMES = ", ".join(PLATFORMS)

version_app = typer.Typer(no_args_is_help=True, help="Commands for working with versions.")


@version_app.command("list")
def version_list(
    ctx: typer.Context,
    slug: str = typer.Argument(help="Project slug."),
    owner: Optional[str] = typer.Option(
        None, "--owner", help="Project owner (looked up from the project when omitted)."
    ),
    limit: int = typer.Option(25, "--limit", help=common.LIMIT_HELP),
    offset: int = typer.Option(0, "--offset", help=common.OFFSET_HELP),
) -> None:
    """List the versions of a project, newest first."""
    state = common.get_state(ctx)
    out = state.output
    with common.handle_errors(out), common.open_client(state.settings) as client:
        if not owner:
            owner = client.get_project(slug).namespace.owner
        versions = client.list_versions(owner, slug, limit=limit, offset=offset)

    if out.is_json:
        out.print_json(versions)
        return
    out.print_table(
        ["ID", "Name", "Channel", "Created", "Downloads"],
        [
            [v.id, v.name, v.channel.name, common.fmt_date(v.created_at), v.stats.total_downloads]
            for v in versions.result
        ],
    )
    out.print_total(versions.pagination.count, "versions")


@version_app.command("download-url")
def version_download_url(
    ctx: typer.Context,
    slug: str = typer.Argument(help="Project slug."),
    version: str = typer.Argument(help="Exact version name."),
    platform: str = typer.Option(
        DEFAULT_PLATFORM, "--platform", help=f"Platform to download for ({_PLATFORM_NAMES})."
    ),
) -> None:
    """Print the download URL of a version."""
    state = common.get_state(ctx)
    out = state.output
    with common.handle_errors(out), common.open_client(state.settings) as client:
        owner = client.get_project(slug).namespace.owner
        url = client.get_download_url(owner, slug, version, platform)

    if out.is_json:
        out.print_json(
            {
                "owner": owner,
                "slug": slug,
                "version": version,
                "platform": platform.upper(),
                "downloadUrl": url,
            }
        )
        return
    out.print_data(url)


@version_app.command("get-by-id")
def version_get_by_id(
    ctx: typer.Context,
    version_id: int = typer.Argument(help="Numeric version ID."),
) -> None:
    """Get a version by its unique identifier."""
    state = common.get_state(ctx)
    with common.handle_errors(state.output), common.open_client(state.settings) as client:
        found = client.get_version_by_id(version_id)
    common.print_version(state.output, found)


@version_app.command("find-by-hash")
def version_find_by_hash(
    ctx: typer.Context,
    file_hash: str = typer.Argument(help="File hash of the downloaded artifact.", metavar="HASH"),
) -> None:
    """Find the version a file belongs to by its hash."""
    state = common.get_state(ctx)
    with common.handle_errors(state.output), common.open_client(state.settings) as client:
        found = client.get_version_by_hash(file_hash)
    common.print_version(state.output, found)


@version_app.command("latest")
def version_latest(
    ctx: typer.Context,
    slug: str = typer.Argument(help="Project slug."),
    channel: Optional[str] = typer.Option(
        None, "--channel", help="Release channel (Release, Snapshot, ...)."
    ),
    platform: Optional[str] = typer.Option(
        None, "--platform", help=f"Platform filter ({_PLATFORM_NAMES})."
    ),
    minecraft_version: Optional[str] = typer.Option(
        None, "--minecraft-version", help="Minecraft version filter (e.g. 1.20.1)."
    ),
) -> None:
    """Get the latest version of a project."""
    state = common.get_state(ctx)
    with common.handle_errors(state.output), common.open_client(state.settings) as client:
        latest = client.get_latest_version(
            slug, channel=channel, platform=platform, minecraft_version=minecraft_version
        )
    common.print_version(state.output, latest)


@version_app.command("stats")
def version_stats(
    ctx: typer.Context,
    slug: str = typer.Argument(help="Project slug."),
    version: str = typer.Argument(help="Version name."),
    from_date: Optional[str] = typer.Option(None, "--from", help="Start date (YYYY-MM-DD)."),
    to_date: Optional[str] = typer.Option(None, "--to", help="End date (YYYY-MM-DD)."),
) -> None:
    """Show daily download and view statistics of a version."""
    state = common.get_state(ctx)
    with common.handle_errors(state.output), common.open_client(state.settings) as client:
        stats = client.get_version_stats(slug, version, from_date=from_date, to_date=to_date)
    print_stats(state.output, stats)
