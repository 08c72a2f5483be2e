"""Output formatting with strict stdout/stderr discipline.

Follows `clig.dev <https://clig.dev/>`_ conventions:

* **stdout** -- primary data only (tables, JSON documents, Markdown pages,
  download URLs). This is what downstream tools pipe and parse.
* **stderr** -- all diagnostics (errors and debug messages).
* **Colour control** -- respects ``NO_COLOR``, ``TERM=dumb`` and the
  ``--no-color`` CLI flag.

:class:`OutputManager` is created once per invocation in
:func:`~pyhangar.app.main_callback` and handed to commands through the
Typer context together with the resolved settings.
"""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Sequence
from typing import Any, Optional

from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pyhangar.models import OutputFormat


def jsonable(data: Any) -> Any:
    """Convert models (and containers of models) to JSON-ready values.

    Models are dumped with the API's camelCase field names.
    """
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, dict):
        return {key: jsonable(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [jsonable(item) for item in data]
    return data


class OutputManager:
    """Central manager for all CLI output.

    Maintains two Rich :class:`~rich.console.Console` instances -- one for
    stdout (data) and one for stderr (diagnostics) -- and routes every
    output call to the correct stream.

    Args:
        format: ``TABLE`` renders Rich tables, ``JSON`` prints indented JSON.
        no_color: Disable all colour and Rich markup.
        verbose: Enable debug-level messages on stderr.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.TABLE,
        no_color: bool = False,
        verbose: bool = False,
    ) -> None:
        self._format = format
        self._no_color = no_color or _should_disable_color()
        self._verbose = verbose

        self._stdout = Console(file=sys.stdout, no_color=self._no_color, highlight=False)
        self._stderr = Console(
            file=sys.stderr, no_color=self._no_color, stderr=True, highlight=False
        )

    @property
    def is_json(self) -> bool:
        return self._format == OutputFormat.JSON

    # ------------------------------------------------------------------ #
    # Data output (stdout)
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        """Print raw text to stdout."""
        print(text, file=sys.stdout, flush=True)

    def print_json(self, data: Any) -> None:
        """Print *data* (models included) as indented JSON to stdout."""
        self.print_data(json.dumps(jsonable(data), indent=2, ensure_ascii=False, default=str))

    def print_table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[Any]],
        title: Optional[str] = None,
    ) -> None:
        """Print tabular data to stdout as a Rich table.

        Cells are converted with ``str``; ``None`` renders as an empty cell.

        Args:
            headers: Column header strings.
            rows: One sequence of cells per row.
            title: Optional table title.
        """
        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*("" if cell is None else str(cell) for cell in row))
        self._stdout.print(table)

    def print_fields(self, fields: Sequence[tuple[str, Any]]) -> None:
        """Print a two-column ``Field``/``Value`` table for a single entity."""
        self.print_table(["Field", "Value"], [[name, value] for name, value in fields])

    def print_total(self, count: int, noun: str) -> None:
        """Print the ``Total: N <noun>`` footer shown under list tables."""
        self.print_data(f"\nTotal: {count} {noun}")

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def error(self, message: str) -> None:
        """Print a bold-red error to stderr."""
        if self._no_color:
            print(f"Error: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def debug(self, message: str) -> None:
        """Print a debug message to stderr when verbose."""
        if self._verbose:
            if self._no_color:
                print(f"[debug] {message}", file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[dim]\\[debug] {escape(message)}[/dim]")


def _should_disable_color() -> bool:
    """Check if color should be disabled per clig.dev.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False
