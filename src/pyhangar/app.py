"""Typer application and CLI entry point for hangar.

This module wires together the top-level Typer application, registers the
sub-command groups (``project``, ``version``, ``user``, ``authors``,
``staff``) and resolves global settings before any command runs.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler and invokes the Typer app.

See Also:
    :mod:`pyhangar.config`: Settings precedence (flags, env, YAML file).
    :mod:`pyhangar.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
from pathlib import Path
from typing import Any, Optional

import typer

from pyhangar import __version__
from pyhangar.commands.authors import authors_app
from pyhangar.commands.common import CliState
from pyhangar.commands.project import project_app
from pyhangar.commands.staff import staff_app
from pyhangar.commands.user import user_app
from pyhangar.commands.version import version_app
from pyhangar.exceptions import ConfigError, HangarError
from pyhangar.exit_codes import EXIT_INTERRUPTED

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

app = typer.Typer(
    name="hangar",
    help="Command-line client for the PaperMC Hangar plugin repository.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(project_app, name="project", help="Commands for working with projects.")
app.add_typer(version_app, name="version", help="Commands for working with versions.")
app.add_typer(user_app, name="user", help="Commands for working with users.")
app.add_typer(authors_app, name="authors", help="Commands for working with authors.")
app.add_typer(staff_app, name="staff", help="Commands for working with Hangar staff.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"hangar {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send library logs to stderr at DEBUG (``--verbose``) or WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Config file (default: $XDG_CONFIG_HOME/hangar/config.yaml).",
    ),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Hangar API base URL."),
    token: Optional[str] = typer.Option(None, "--token", help="Hangar API token."),
    timeout: Optional[str] = typer.Option(
        None, "--timeout", help="HTTP timeout, in seconds or as a duration such as 30s or 1m."
    ),
    output_format: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output format: table or json."
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every sub-command.

    Resolves :class:`~pyhangar.models.Settings` from flags, ``HANGAR_*``
    environment variables and the YAML config file, configures logging and
    stores a :class:`~pyhangar.commands.common.CliState` in ``ctx.obj`` so
    that sub-commands can read it.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        config_file: Explicit config file path; it must exist.
        base_url: Base URL override (highest precedence).
        token: API token override.
        timeout: Timeout override.
        output_format: ``table`` or ``json``.
        no_color: Disable all colour and Rich markup.
        verbose: Enable debug-level diagnostics.
    """
    from pyhangar.config import load_settings
    from pyhangar.output import OutputManager

    configure_logging(verbose)

    try:
        settings = load_settings(
            config_file,
            base_url=base_url,
            token=token,
            timeout=timeout,
            output=output_format,
        )
    except ConfigError as exc:
        OutputManager(no_color=no_color).error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    output = OutputManager(format=settings.output, no_color=no_color, verbose=verbose)
    output.debug(f"using API at {settings.base_url} (timeout {settings.timeout}s)")
    ctx.obj = CliState(settings=settings, output=output)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``hangar`` console script.

    Errors raised inside commands are already reported and mapped to exit
    code 1 by :func:`~pyhangar.commands.common.handle_errors`; any
    :class:`~pyhangar.exceptions.HangarError` escaping elsewhere gets the
    same treatment here.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except HangarError as exc:
        from pyhangar.output import OutputManager

        OutputManager().error(str(exc))
        sys.exit(exc.exit_code)
