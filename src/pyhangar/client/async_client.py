"""Asynchronous Hangar API client -- mirrors :class:`~pyhangar.client.sync_client.HangarClient`.

This module provides :class:`AsyncHangarClient`, the non-blocking
counterpart of :class:`~pyhangar.client.sync_client.HangarClient`. It wraps
:class:`httpx.AsyncClient` and offers the same operations as coroutines,
sharing the request builders in :mod:`pyhangar.client.endpoints` and the
decoding rules in :mod:`pyhangar.client.response`.

Cancellation follows asyncio: cancelling the calling task, or a deadline
set with :func:`asyncio.timeout` / :func:`asyncio.wait_for`, aborts the
in-flight request and the cancellation propagates unchanged. The
configured transport timeout still bounds every request and surfaces as
:class:`~pyhangar.exceptions.RequestTimeoutError`.

Example::

    async with AsyncHangarClient() as client:
        async with asyncio.timeout(5):
            project = await client.get_project("fancyglow")
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from pyhangar.client import endpoints, lookup, response as decode
from pyhangar.client.endpoints import ApiRequest
from pyhangar.client.sync_client import build_headers
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


class AsyncHangarClient:
    """Non-blocking client for the Hangar API.

    Use as an async context manager, or call :meth:`aclose` when done.

    Args:
        config: Base URL, token, timeout and optional async transport.
    """

    def __init__(self, config: Optional[ClientConfig] = None) -> None:
        self._config = config or ClientConfig()
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url,
            headers=build_headers(self._config),
            timeout=self._config.timeout,
            transport=self._config.transport,  # type: ignore[arg-type]
            follow_redirects=True,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> AsyncHangarClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------ #
    # Projects
    # ------------------------------------------------------------------ #

    async def get_project(self, slug: str) -> Project:
        req = endpoints.get_project(slug)
        return decode.decode_model(await self._send(req), Project, req.operation)

    async def list_projects(
        self, limit: int = 0, offset: int = 0, category: Optional[str] = None
    ) -> ProjectList:
        req = endpoints.list_projects(limit, offset, category)
        return decode.decode_model(await self._send(req), ProjectList, req.operation)

    async def get_project_members(self, slug: str, limit: int = 0, offset: int = 0) -> MemberList:
        req = endpoints.get_project_members(slug, limit, offset)
        return decode.decode_model(await self._send(req), MemberList, req.operation)

    async def get_project_stargazers(self, slug: str, limit: int = 0, offset: int = 0) -> UserList:
        req = endpoints.get_project_stargazers(slug, limit, offset)
        return decode.decode_model(await self._send(req), UserList, req.operation)

    async def get_project_watchers(self, slug: str, limit: int = 0, offset: int = 0) -> UserList:
        req = endpoints.get_project_watchers(slug, limit, offset)
        return decode.decode_model(await self._send(req), UserList, req.operation)

    async def get_project_stats(
        self, slug: str, from_date: Optional[str] = None, to_date: Optional[str] = None
    ) -> ProjectStatsData:
        req = endpoints.get_project_stats(slug, from_date, to_date)
        return decode.decode_with(await self._send(req), STATS_ADAPTER, req.operation)

    async def get_project_page(self, slug: str, path: Optional[str] = None) -> Page:
        req = endpoints.get_project_page(slug, path)
        return decode.decode_page(await self._send(req), path or endpoints.HOME_PAGE, req.operation)

    async def get_project_main_page(self, slug: str) -> Page:
        return await self.get_project_page(slug, endpoints.HOME_PAGE)

    # ------------------------------------------------------------------ #
    # Versions
    # ------------------------------------------------------------------ #

    async def list_versions(
        self, owner: str, slug: str, limit: int = 0, offset: int = 0
    ) -> VersionList:
        req = endpoints.list_versions(owner, slug, limit, offset)
        return decode.decode_model(await self._send(req), VersionList, req.operation)

    async def find_version(self, owner: str, slug: str, version: str) -> Version:
        req = endpoints.find_version(owner, slug, version)
        versions = decode.decode_model(await self._send(req), VersionList, req.operation)
        return lookup.find_version(versions.result, version)

    async def get_download_url(
        self, owner: str, slug: str, version: str, platform: Optional[str] = None
    ) -> str:
        found = await self.find_version(owner, slug, version)
        return lookup.resolve_download_url(found, endpoints.default_platform(platform))

    async def get_version(self, slug: str, name: str) -> Version:
        req = endpoints.get_version(slug, name)
        return decode.decode_model(await self._send(req), Version, req.operation)

    async def get_version_by_id(self, version_id: int) -> Version:
        req = endpoints.get_version_by_id(version_id)
        return decode.decode_model(await self._send(req), Version, req.operation)

    async def get_version_by_hash(self, file_hash: str) -> Version:
        req = endpoints.get_version_by_hash(file_hash)
        return decode.decode_model(await self._send(req), Version, req.operation)

    async def get_version_stats(
        self,
        slug: str,
        version: str,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
    ) -> VersionStatsData:
        req = endpoints.get_version_stats(slug, version, from_date, to_date)
        return decode.decode_with(await self._send(req), STATS_ADAPTER, req.operation)

    async def get_latest_version_name(
        self,
        slug: str,
        channel: Optional[str] = None,
        platform: Optional[str] = None,
        minecraft_version: Optional[str] = None,
    ) -> str:
        latest = await self._latest(slug, channel, platform, minecraft_version)
        return latest.name if isinstance(latest, Version) else latest

    async def get_latest_version(
        self,
        slug: str,
        channel: Optional[str] = None,
        platform: Optional[str] = None,
        minecraft_version: Optional[str] = None,
    ) -> Version:
        latest = await self._latest(slug, channel, platform, minecraft_version)
        if isinstance(latest, Version):
            return latest
        return await self.get_version(slug, latest)

    async def get_latest_release_version(self, slug: str) -> Version:
        return await self.get_latest_version(slug, channel=endpoints.RELEASE_CHANNEL)

    async def _latest(
        self,
        slug: str,
        channel: Optional[str],
        platform: Optional[str],
        minecraft_version: Optional[str],
    ) -> Version | str:
        req = endpoints.get_latest_version(slug, channel, platform, minecraft_version)
        return decode.decode_latest(await self._send(req), req.operation)

    # ------------------------------------------------------------------ #
    # Users
    # ------------------------------------------------------------------ #

    async def list_users(
        self, query: Optional[str] = None, limit: int = 0, offset: int = 0
    ) -> UserList:
        req = endpoints.list_users(query, limit, offset)
        return decode.decode_model(await self._send(req), UserList, req.operation)

    async def get_user(self, username: str) -> User:
        req = endpoints.get_user(username)
        return decode.decode_model(await self._send(req), User, req.operation)

    async def get_user_starred(
        self, username: str, limit: int = 0, offset: int = 0
    ) -> ProjectList:
        req = endpoints.get_user_starred(username, limit, offset)
        return decode.decode_project_list(await self._send(req), req.operation)

    async def get_user_watching(
        self, username: str, limit: int = 0, offset: int = 0
    ) -> ProjectList:
        req = endpoints.get_user_watching(username, limit, offset)
        return decode.decode_project_list(await self._send(req), req.operation)

    async def get_user_pinned(self, username: str) -> ProjectList:
        req = endpoints.get_user_pinned(username)
        return decode.decode_project_list(await self._send(req), req.operation)

    async def list_authors(self, limit: int = 0, offset: int = 0) -> AuthorList:
        req = endpoints.list_authors(limit, offset)
        return decode.decode_model(await self._send(req), AuthorList, req.operation)

    async def list_staff(self) -> list[StaffMember]:
        req = endpoints.list_staff()
        return decode.decode_staff(await self._send(req), req.operation)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _send(self, req: ApiRequest) -> httpx.Response:
        logger.debug("making API request: GET %s params=%s", req.path, req.params)
        try:
            response = await self._client.get(req.path, params=req.params or None)
        except httpx.TransportError as exc:
            raise decode.transport_error(exc, req.operation) from exc
        logger.debug("API response: %s %s", response.status_code, response.url)
        decode.check_status(response, req.operation)
        return response
