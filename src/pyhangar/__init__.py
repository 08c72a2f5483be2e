"""pyhangar -- typed client and CLI for the PaperMC Hangar REST API.

The package exposes the read side of the Hangar API (projects, versions,
users, authors, staff, pages and statistics) as typed calls returning
immutable Pydantic models, plus a Typer CLI that renders results as tables
or JSON.

Typical usage::

    from pyhangar import ClientConfig, HangarClient

    with HangarClient(ClientConfig(token="...")) as client:
        project = client.get_project("fancyglow")

Modules:
    client: Blocking and asyncio clients plus the shared request layer.
    models: Pydantic models for API entities and CLI settings.
    config: Settings resolution from flags, environment and YAML.
    exceptions: Error hierarchy with structured fields.
    output: stdout/stderr formatting with Rich support.
    app: Typer application and console-script entry point.
"""

__version__ = "0.3.0"

from pyhangar.client import AsyncHangarClient, ClientConfig, HangarClient  # noqa: E402
from pyhangar.exceptions import HangarError  # noqa: E402

__all__ = [
    "AsyncHangarClient",
    "ClientConfig",
    "HangarClient",
    "HangarError",
    "__version__",
]
