"""Helpers shared by every command module.

The root callback stores a :class:`CliState` in ``ctx.obj``; commands pull
it back with :func:`get_state`, open a client with :func:`open_client` and
wrap their work in :func:`handle_errors` so that any
:class:`~pyhangar.exceptions.HangarError` is reported on stderr and turned
into exit code 1.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import typer

from pyhangar.client import HangarClient
from pyhangar.exceptions import HangarError
from pyhangar.models import Settings, User, Version
from pyhangar.output import OutputManager

logger = logging.getLogger(__name__)

LIMIT_HELP = "Maximum number of results."
OFFSET_HELP = "Offset for pagination."


@dataclass(frozen=True)
class CliState:
    """Resolved settings and output manager for one invocation."""

    settings: Settings
    output: OutputManager


def get_state(ctx: typer.Context) -> CliState:
    """Return the :class:`CliState` stored by the root callback."""
    return ctx.find_root().obj


def open_client(settings: Settings) -> HangarClient:
    """Create a blocking client for *settings*."""
    return HangarClient(settings.client_config())


@contextmanager
def handle_errors(output: OutputManager) -> Iterator[None]:
    """Report :class:`HangarError` on stderr and exit with its code."""
    try:
        yield
    except HangarError as exc:
        logger.debug("command failed: %r", exc)
        output.error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


# ------------------------------------------------------------------ #
# Formatting
# ------------------------------------------------------------------ #


def fmt_date(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d") if value else ""


def fmt_datetime(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else ""


def print_version(output: OutputManager, version: Version) -> None:
    """Render a single version as JSON or as a field table plus description."""
    if output.is_json:
        output.print_json(version)
        return
    output.print_fields(
        [
            ("ID", version.id),
            ("Name", version.name),
            ("Author", version.author),
            ("Created", fmt_datetime(version.created_at)),
            ("Visibility", version.visibility),
            ("Review State", version.review_state),
            ("Downloads", version.stats.total_downloads),
        ]
    )
    if version.description:
        output.print_data(f"\nDescription:\n{version.description}")


def user_rows(users: list[User], *, with_roles: bool = True) -> list[list[object]]:
    rows: list[list[object]] = []
    for user in users:
        row: list[object] = [user.name, user.project_count, fmt_date(user.join_date)]
        if with_roles:
            row.append(user.role_names)
        rows.append(row)
    return rows
