"""CLI sub-command groups for hangar.

Each module exports a :class:`typer.Typer` sub-application that
:mod:`pyhangar.app` mounts on the root command:

* :mod:`~pyhangar.commands.project` -- projects, their members, stats and pages.
* :mod:`~pyhangar.commands.version` -- versions, download URLs and latest releases.
* :mod:`~pyhangar.commands.user` -- users and their starred, watched and pinned projects.
* :mod:`~pyhangar.commands.authors` -- project authors.
* :mod:`~pyhangar.commands.staff` -- Hangar staff.

Shared plumbing (context state, client construction, error reporting and
formatting helpers) lives in :mod:`~pyhangar.commands.common`.
"""
