"""Shared test fixtures for pyhangar.

Provides JSON fixtures of real-shaped API responses, a small in-memory
Hangar server built on :class:`httpx.MockTransport`, and an isolated
environment so that no test reads the user's config file or ``HANGAR_*``
variables. These fixtures are automatically discovered by pytest.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional

import httpx
import pytest

from pyhangar.client import HangarClient
from pyhangar.models import ClientConfig, Settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"

BASE_URL = "https://hangar.test/api/v1"
API_PREFIX = "/api/v1"


def load_fixture(name: str) -> Any:
    """Load ``tests/fixtures/<name>.json``."""
    with open(FIXTURES_DIR / f"{name}.json", encoding="utf-8") as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Hide the real config file and HANGAR_* variables; make output deterministic."""
    import os

    for key in list(os.environ):
        if key.startswith("HANGAR_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("COLUMNS", "200")


# ---------------------------------------------------------------------------
# Mock Hangar server
# ---------------------------------------------------------------------------


class MockHangar:
    """Routes requests by escaped path (without the ``/api/v1`` prefix).

    Unknown paths answer 404. Every request is recorded in :attr:`requests`.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def json(self, path: str, data: Any, status_code: int = 200) -> None:
        self.routes[path] = lambda request: httpx.Response(status_code, json=data)

    def text(self, path: str, body: str, status_code: int = 200) -> None:
        self.routes[path] = lambda request: httpx.Response(status_code, text=body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(path_of(request))
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        return route(request)

    @property
    def paths(self) -> list[str]:
        return [path_of(request) for request in self.requests]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def path_of(request: httpx.Request) -> str:
    """Escaped request path relative to the API prefix."""
    raw = request.url.raw_path.decode("ascii").split("?", 1)[0]
    return raw[len(API_PREFIX):] if raw.startswith(API_PREFIX) else raw


@pytest.fixture
def fixture_data() -> Callable[[str], Any]:
    """Loader for JSON fixtures by name."""
    return load_fixture


@pytest.fixture
def hangar() -> MockHangar:
    return MockHangar()


@pytest.fixture
def make_client() -> Callable[..., HangarClient]:
    """Factory for clients wired to a handler through MockTransport."""
    clients: list[HangarClient] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response], token: Optional[str] = None,
              timeout: Optional[float] = None) -> HangarClient:
        client = HangarClient(
            ClientConfig(
                base_url=BASE_URL,
                token=token,
                timeout=timeout,
                transport=httpx.MockTransport(handler),
            )
        )
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def cli_hangar(monkeypatch: pytest.MonkeyPatch, hangar: MockHangar) -> MockHangar:
    """Point every CLI command at the mock server."""
    from pyhangar.commands import common

    def _open_client(settings: Settings) -> HangarClient:
        config = settings.client_config().model_copy(update={"transport": hangar.transport()})
        return HangarClient(config)

    monkeypatch.setattr(common, "open_client", _open_client)
    return hangar
