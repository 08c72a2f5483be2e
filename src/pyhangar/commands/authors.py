"""Author commands -- ``hangar authors list``."""

from __future__ import annotations

import typer

from pyhangar.commands import common

authors_app = typer.Typer(no_args_is_help=True, help="Commands for working with authors.")


@authors_app.command("list")
def authors_list(
    ctx: typer.Context,
    limit: int = typer.Option(25, "--limit", help=common.LIMIT_HELP),
    offset: int = typer.Option(0, "--offset", help=common.OFFSET_HELP),
) -> None:
    """List users who have published projects."""
    state = common.get_state(ctx)
    out = state.output
    with common.handle_errors(out), common.open_client(state.settings) as client:
        authors = client.list_authors(limit=limit, offset=offset)

    if out.is_json:
        out.print_json(authors)
        return
    out.print_table(["Username", "Projects", "Joined", "Roles"], common.user_rows(authors.result))
    out.print_total(authors.pagination.count, "authors")
