"""Staff commands -- ``hangar staff list``."""

from __future__ import annotations

import typer

from pyhangar.commands import common

staff_app = typer.Typer(no_args_is_help=True, help="Commands for working with Hangar staff.")


@staff_app.command("list")
def staff_list(ctx: typer.Context) -> None:
    """List Hangar staff members."""
    state = common.get_state(ctx)
    out = state.output
    with common.handle_errors(out), common.open_client(state.settings) as client:
        staff = client.list_staff()

    if out.is_json:
        out.print_json(staff)
        return
    out.print_table(
        ["Username", "Roles", "Joined"],
        [[member.name, member.role_names, common.fmt_date(member.join_date)] for member in staff],
    )
    out.print_total(len(staff), "staff members")
