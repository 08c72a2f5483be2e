"""Request builders for every Hangar API operation.

Each public function validates its arguments, escapes the user-supplied path
segments, applies the list defaults, and returns an :class:`ApiRequest`
describing a single GET. Nothing here performs I/O, so both
:class:`~pyhangar.client.sync_client.HangarClient` and
:class:`~pyhangar.client.async_client.AsyncHangarClient` share the same
URL and parameter rules, and the rules can be tested without a server.

Rules applied by every builder:

* Path segments (slugs, owners, usernames, hashes, version names, page
  paths) are percent-escaped once with ``quote(segment, safe="")``, so a
  ``/`` inside a value can never add a path level.
* List endpoints always send ``limit`` (``0`` becomes
  :data:`~pyhangar.models.DEFAULT_LIMIT`) and ``offset`` (including ``0``).
* Optional filters are only sent when non-empty.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import quote

from pyhangar.exceptions import InvalidArgumentError
from pyhangar.models import DEFAULT_LIMIT, DEFAULT_PLATFORM

DOWNLOAD_SCAN_LIMIT = 100
"""Number of versions scanned by :func:`find_version`. Versions beyond the
first page of this size are not found."""

RELEASE_CHANNEL = "Release"

HOME_PAGE = "home"


@dataclass(frozen=True)
class ApiRequest:
    """A fully-resolved GET request relative to the client's base URL.

    Attributes:
        operation: Human-readable operation name used in error messages
            (``failed to <operation>: ...``).
        path: Escaped URL path starting with ``/``.
        params: Query parameters to encode; empty when none apply.
    """

    operation: str
    path: str
    params: dict[str, Any] = field(default_factory=dict)


def escape(segment: str) -> str:
    """Percent-escape a single path segment, including ``/``.

    The dot segments ``.`` and ``..`` are escaped as well so that URL
    normalisation cannot turn them into a different endpoint.
    """
    if segment in (".", ".."):
        return segment.replace(".", "%2E")
    return quote(segment, safe="")


def _require(value: Optional[str], name: str, operation: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidArgumentError(f"{name} cannot be empty", operation=operation)
    return value


def _page_params(limit: int, offset: int, operation: str) -> dict[str, Any]:
    if limit < 0:
        raise InvalidArgumentError(f"limit must not be negative, got {limit}", operation=operation)
    if offset < 0:
        raise InvalidArgumentError(f"offset must not be negative, got {offset}", operation=operation)
    return {"limit": limit or DEFAULT_LIMIT, "offset": offset}


def _optional_params(**values: Optional[str]) -> dict[str, str]:
    return {key: value for key, value in values.items() if value}


# --- Projects ---


def get_project(slug: str) -> ApiRequest:
    op = "get project"
    _require(slug, "slug", op)
    return ApiRequest(op, f"/projects/{escape(slug)}")


def list_projects(limit: int = 0, offset: int = 0, category: Optional[str] = None) -> ApiRequest:
    op = "list projects"
    params = _page_params(limit, offset, op)
    params.update(_optional_params(category=category))
    return ApiRequest(op, "/projects", params)


def get_project_members(slug: str, limit: int = 0, offset: int = 0) -> ApiRequest:
    op = "get project members"
    _require(slug, "slug", op)
    return ApiRequest(op, f"/projects/{escape(slug)}/members", _page_params(limit, offset, op))


def get_project_stargazers(slug: str, limit: int = 0, offset: int = 0) -> ApiRequest:
    op = "get project stargazers"
    _require(slug, "slug", op)
    return ApiRequest(op, f"/projects/{escape(slug)}/stargazers", _page_params(limit, offset, op))


def get_project_watchers(slug: str, limit: int = 0, offset: int = 0) -> ApiRequest:
    op = "get project watchers"
    _require(slug, "slug", op)
    return ApiRequest(op, f"/projects/{escape(slug)}/watchers", _page_params(limit, offset, op))


def get_project_stats(
    slug: str,
    from_date: Optional[str] = None,
    to_date: Optional[str] = None,
) -> ApiRequest:
    """Daily project stats; dates are passed through verbatim when given."""
    op = "get project stats"
    _require(slug, "slug", op)
    return ApiRequest(
        op,
        f"/projects/{escape(slug)}/stats",
        _optional_params(fromDate=from_date, toDate=to_date),
    )


def get_project_page(slug: str, path: Optional[str] = None) -> ApiRequest:
    op = "get project page"
    _require(slug, "slug", op)
    page_path = path or HOME_PAGE
    return ApiRequest(op, f"/projects/{escape(slug)}/pages/{escape(page_path)}")


# --- Versions ---


def list_versions(owner: str, slug: str, limit: int = 0, offset: int = 0) -> ApiRequest:
    op = "list versions"
    _require(owner, "owner", op)
    _require(slug, "slug", op)
    return ApiRequest(
        op,
        f"/projects/{escape(owner)}/{escape(slug)}/versions",
        _page_params(limit, offset, op),
    )


def find_version(owner: str, slug: str, version: str) -> ApiRequest:
    """First step of the download lookup: one page of up to 100 versions."""
    op = "find version"
    _require(owner, "owner", op)
    _require(slug, "slug", op)
    _require(version, "version", op)
    return ApiRequest(
        op,
        f"/projects/{escape(owner)}/{escape(slug)}/versions",
        {"limit": DOWNLOAD_SCAN_LIMIT, "offset": 0},
    )


def get_version(slug: str, name: str) -> ApiRequest:
    op = "get version"
    _require(slug, "slug", op)
    _require(name, "version", op)
    return ApiRequest(op, f"/projects/{escape(slug)}/versions/{escape(name)}")


def get_version_by_id(version_id: int) -> ApiRequest:
    op = "get version"
    if isinstance(version_id, bool) or not isinstance(version_id, int) or version_id <= 0:
        raise InvalidArgumentError(f"version id must be positive, got {version_id!r}", operation=op)
    return ApiRequest(op, f"/versions/{version_id}")


def get_version_by_hash(file_hash: str) -> ApiRequest:
    op = "find version by hash"
    _require(file_hash, "hash", op)
    return ApiRequest(op, f"/versions/find/{escape(file_hash)}")


def get_version_stats(
    slug: str,
    version: str,
    from_date: Optional[str] = None,
    to_date: Optional[str] = None,
) -> ApiRequest:
    op = "get version stats"
    _require(slug, "slug", op)
    _require(version, "version", op)
    return ApiRequest(
        op,
        f"/projects/{escape(slug)}/versions/{escape(version)}/stats",
        _optional_params(fromDate=from_date, toDate=to_date),
    )


def get_latest_version(
    slug: str,
    channel: Optional[str] = None,
    platform: Optional[str] = None,
    minecraft_version: Optional[str] = None,
) -> ApiRequest:
    """First step of the latest-version lookup.

    The server answers with the version name (plain text) or, on some
    deployments, the full version object.
    """
    op = "get latest version"
    _require(slug, "slug", op)
    return ApiRequest(
        op,
        f"/projects/{escape(slug)}/latest",
        _optional_params(channel=channel, platform=platform, platformVersion=minecraft_version),
    )


def default_platform(platform: Optional[str]) -> str:
    return (platform or DEFAULT_PLATFORM).upper()


# --- Users ---


def list_users(query: Optional[str] = None, limit: int = 0, offset: int = 0) -> ApiRequest:
    op = "list users"
    params = _page_params(limit, offset, op)
    params.update(_optional_params(query=query))
    return ApiRequest(op, "/users", params)


def get_user(username: str) -> ApiRequest:
    op = "get user"
    _require(username, "username", op)
    return ApiRequest(op, f"/users/{escape(username)}")


def get_user_starred(username: str, limit: int = 0, offset: int = 0) -> ApiRequest:
    op = "get starred projects"
    _require(username, "username", op)
    return ApiRequest(op, f"/users/{escape(username)}/starred", _page_params(limit, offset, op))


def get_user_watching(username: str, limit: int = 0, offset: int = 0) -> ApiRequest:
    op = "get watching projects"
    _require(username, "username", op)
    return ApiRequest(op, f"/users/{escape(username)}/watching", _page_params(limit, offset, op))


def get_user_pinned(username: str) -> ApiRequest:
    op = "get pinned projects"
    _require(username, "username", op)
    return ApiRequest(op, f"/users/{escape(username)}/pinned")


def list_authors(limit: int = 0, offset: int = 0) -> ApiRequest:
    op = "list authors"
    return ApiRequest(op, "/authors", _page_params(limit, offset, op))


def list_staff() -> ApiRequest:
    return ApiRequest("list staff", "/staff")
