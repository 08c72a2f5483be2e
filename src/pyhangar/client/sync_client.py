"""Synchronous Hangar API client.

This module provides :class:`HangarClient`, the blocking client used by the
``hangar`` CLI commands. It wraps :class:`httpx.Client` and exposes one
method per logical API operation. Every method:

1. builds an :class:`~pyhangar.client.endpoints.ApiRequest` (argument
   validation, path escaping, query defaults);
2. performs a single GET with ``Accept: application/json`` and, when a
   token is configured, ``Authorization: Bearer <token>``;
3. classifies the outcome through :mod:`pyhangar.client.response`.

There are no retries, no caching and no mutable state besides the httpx
connection pool, so one client can be shared between threads.

See Also:
    :class:`~pyhangar.client.async_client.AsyncHangarClient` for the
    equivalent non-blocking implementation.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from pyhangar import __version__
from pyhangar.client import endpoints, lookup, response as decode
from pyhangar.client.endpoints import ApiRequest
from pyhangar.models import (
    AuthorList,
    ClientConfig,
    MemberList,
    Page,
    Project,
    ProjectList,
    ProjectStatsData,
    STATS_ADAPTER,
    StaffMember,
    User,
    UserList,
    Version,
    VersionList,
    VersionStatsData,
)

logger = logging.getLogger(__name__)


def build_headers(config: ClientConfig) -> dict[str, str]:
    """Default headers sent with every request."""
    headers = {
        "Accept": "application/json",
        "User-Agent": f"pyhangar/{__version__}",
    }
    if config.token:
        headers["Authorization"] = f"Bearer {config.token}"
    return headers


class HangarClient:
    """Blocking client for the Hangar API.

    Constructing a client performs no network access. The client can be used
    as a context manager, or closed explicitly with :meth:`close`.

    Args:
        config: Base URL, token, timeout and optional transport. Defaults
            to the public Hangar API with a 30 second timeout.

    Example::

        with HangarClient(ClientConfig(token="...")) as client:
            projects = client.list_projects(limit=10)
            for project in projects.result:
                print(project.name)
    """

    def __init__(self, config: Optional[ClientConfig] = None) -> None:
        self._config = config or ClientConfig()
        self._client = httpx.Client(
            base_url=self._config.base_url,
            headers=build_headers(self._config),
            timeout=self._config.timeout,
            transport=self._config.transport,  # type: ignore[arg-type]
            follow_redirects=True,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> HangarClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._client.close()

    # ------------------------------------------------------------------ #
    # Projects
    # ------------------------------------------------------------------ #

    def get_project(self, slug: str) -> Project:
        """Retrieve a project by slug."""
        req = endpoints.get_project(slug)
        return decode.decode_model(self._send(req), Project, req.operation)

    def list_projects(
        self, limit: int = 0, offset: int = 0, category: Optional[str] = None
    ) -> ProjectList:
        """Retrieve a page of projects, optionally filtered by *category*."""
        req = endpoints.list_projects(limit, offset, category)
        return decode.decode_model(self._send(req), ProjectList, req.operation)

    def get_project_members(self, slug: str, limit: int = 0, offset: int = 0) -> MemberList:
        req = endpoints.get_project_members(slug, limit, offset)
        return decode.decode_model(self._send(req), MemberList, req.operation)

    def get_project_stargazers(self, slug: str, limit: int = 0, offset: int = 0) -> UserList:
        req = endpoints.get_project_stargazers(slug, limit, offset)
        return decode.decode_model(self._send(req), UserList, req.operation)

    def get_project_watchers(self, slug: str, limit: int = 0, offset: int = 0) -> UserList:
        req = endpoints.get_project_watchers(slug, limit, offset)
        return decode.decode_model(self._send(req), UserList, req.operation)

    def get_project_stats(
        self, slug: str, from_date: Optional[str] = None, to_date: Optional[str] = None
    ) -> ProjectStatsData:
        """Retrieve daily project statistics.

        Without dates the server applies its own default range. The result
        maps ISO dates to metrics; dates are not guaranteed to be contiguous.
        """
        req = endpoints.get_project_stats(slug, from_date, to_date)
        return decode.decode_with(self._send(req), STATS_ADAPTER, req.operation)

    def get_project_page(self, slug: str, path: Optional[str] = None) -> Page:
        """Retrieve a project page; *path* defaults to ``home``."""
        req = endpoints.get_project_page(slug, path)
        return decode.decode_page(self._send(req), path or endpoints.HOME_PAGE, req.operation)

    def get_project_main_page(self, slug: str) -> Page:
        """Retrieve the main (home) page of a project."""
        return self.get_project_page(slug, endpoints.HOME_PAGE)

    # ------------------------------------------------------------------ #
    # Versions
    # ------------------------------------------------------------------ #

    def list_versions(self, owner: str, slug: str, limit: int = 0, offset: int = 0) -> VersionList:
        req = endpoints.list_versions(owner, slug, limit, offset)
        return decode.decode_model(self._send(req), VersionList, req.operation)

    def find_version(self, owner: str, slug: str, version: str) -> Version:
        """Find a version by exact name within the first 100 versions.

        Raises:
            VersionNotFoundError: If the name is not on that first page.
        """
        req = endpoints.find_version(owner, slug, version)
        versions = decode.decode_model(self._send(req), VersionList, req.operation)
        return lookup.find_version(versions.result, version)

    def get_download_url(
        self, owner: str, slug: str, version: str, platform: Optional[str] = None
    ) -> str:
        """Resolve the download URL of a version for *platform* (default ``PAPER``).

        Two steps: :meth:`find_version`, then
        :func:`~pyhangar.client.lookup.resolve_download_url`, which prefers
        the Hangar-hosted URL over the external one.
        """
        found = self.find_version(owner, slug, version)
        return lookup.resolve_download_url(found, endpoints.default_platform(platform))

    def get_version(self, slug: str, name: str) -> Version:
        """Retrieve a version of a project by name."""
        req = endpoints.get_version(slug, name)
        return decode.decode_model(self._send(req), Version, req.operation)

    def get_version_by_id(self, version_id: int) -> Version:
        req = endpoints.get_version_by_id(version_id)
        return decode.decode_model(self._send(req), Version, req.operation)

    def get_version_by_hash(self, file_hash: str) -> Version:
        """Find the version whose file has the given hash."""
        req = endpoints.get_version_by_hash(file_hash)
        return decode.decode_model(self._send(req), Version, req.operation)

    def get_version_stats(
        self,
        slug: str,
        version: str,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
    ) -> VersionStatsData:
        req = endpoints.get_version_stats(slug, version, from_date, to_date)
        return decode.decode_with(self._send(req), STATS_ADAPTER, req.operation)

    def get_latest_version_name(
        self,
        slug: str,
        channel: Optional[str] = None,
        platform: Optional[str] = None,
        minecraft_version: Optional[str] = None,
    ) -> str:
        """Return the name of the latest version matching the filters."""
        latest = self._latest(slug, channel, platform, minecraft_version)
        return latest.name if isinstance(latest, Version) else latest

    def get_latest_version(
        self,
        slug: str,
        channel: Optional[str] = None,
        platform: Optional[str] = None,
        minecraft_version: Optional[str] = None,
    ) -> Version:
        """Retrieve the latest version matching the optional filters.

        When the shortcut endpoint only returns a name, the full version is
        fetched with :meth:`get_version`.
        """
        latest = self._latest(slug, channel, platform, minecraft_version)
        if isinstance(latest, Version):
            return latest
        return self.get_version(slug, latest)

    def get_latest_release_version(self, slug: str) -> Version:
        """Retrieve the latest version on the ``Release`` channel."""
        return self.get_latest_version(slug, channel=endpoints.RELEASE_CHANNEL)

    def _latest(
        self,
        slug: str,
        channel: Optional[str],
        platform: Optional[str],
        minecraft_version: Optional[str],
    ) -> Version | str:
        req = endpoints.get_latest_version(slug, channel, platform, minecraft_version)
        return decode.decode_latest(self._send(req), req.operation)

    # ------------------------------------------------------------------ #
    # Users
    # ------------------------------------------------------------------ #

    def list_users(self, query: Optional[str] = None, limit: int = 0, offset: int = 0) -> UserList:
        """Search users; without *query* all users are listed."""
        req = endpoints.list_users(query, limit, offset)
        return decode.decode_model(self._send(req), UserList, req.operation)

    def get_user(self, username: str) -> User:
        req = endpoints.get_user(username)
        return decode.decode_model(self._send(req), User, req.operation)

    def get_user_starred(self, username: str, limit: int = 0, offset: int = 0) -> ProjectList:
        req = endpoints.get_user_starred(username, limit, offset)
        return decode.decode_project_list(self._send(req), req.operation)

    def get_user_watching(self, username: str, limit: int = 0, offset: int = 0) -> ProjectList:
        req = endpoints.get_user_watching(username, limit, offset)
        return decode.decode_project_list(self._send(req), req.operation)

    def get_user_pinned(self, username: str) -> ProjectList:
        req = endpoints.get_user_pinned(username)
        return decode.decode_project_list(self._send(req), req.operation)

    def list_authors(self, limit: int = 0, offset: int = 0) -> AuthorList:
        req = endpoints.list_authors(limit, offset)
        return decode.decode_model(self._send(req), AuthorList, req.operation)

    def list_staff(self) -> list[StaffMember]:
        """List Hangar staff. The endpoint returns a bare array, not an envelope."""
        req = endpoints.list_staff()
        return decode.decode_staff(self._send(req), req.operation)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _send(self, req: ApiRequest) -> httpx.Response:
        """Perform the GET described by *req* and raise on transport or status errors."""
        logger.debug("making API request: GET %s params=%s", req.path, req.params)
        try:
            response = self._client.get(req.path, params=req.params or None)
        except httpx.TransportError as exc:
            raise decode.transport_error(exc, req.operation) from exc
        logger.debug("API response: %s %s", response.status_code, response.url)
        decode.check_status(response, req.operation)
        return response
