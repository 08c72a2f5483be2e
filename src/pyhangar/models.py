"""Canonical Pydantic models shared across all pyhangar modules.

This is the single source of truth for data shapes in the project. The
models fall into two groups:

**API models** -- immutable snapshots decoded from Hangar JSON responses:
    :class:`Project`, :class:`Version`, :class:`DownloadInfo`,
    :class:`User`, :class:`Author`, :class:`StaffMember`,
    :class:`ProjectMember`, :class:`Page`, :class:`DailyStats`,
    :class:`Pagination` and the generic :class:`PaginatedResult` envelope.

**Configuration models** -- resolved once at startup and passed explicitly:
    :class:`OutputFormat`, :class:`Settings` and :class:`ClientConfig`.

API models are frozen, accept both the API's camelCase keys and the Python
field names, and ignore keys they do not know about so that additions on the
server side never break decoding. ``model_dump(mode="json", by_alias=True)``
reproduces the API's field names.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar, Union

import httpx
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

DEFAULT_BASE_URL = "https://hangar.papermc.io/api/v1"
"""Public production endpoint of the Hangar API."""

DEFAULT_TIMEOUT = 30.0
"""Default per-request timeout in seconds."""

DEFAULT_LIMIT = 25
"""Page size sent when a list call is made with ``limit=0``."""

DEFAULT_PLATFORM = "PAPER"
"""Platform used by download lookups when none is given."""

PLATFORMS = ("PAPER", "WATERFALL", "VELOCITY")
"""Platforms known to the Hangar API."""


class HangarModel(BaseModel):
    """Base class for all API snapshots."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


# --- Projects ---


class Namespace(HangarModel):
    """Owner and slug that together identify a project."""

    owner: str = ""
    slug: str = ""


class ProjectStats(HangarModel):
    """Engagement counters for a project."""

    views: int = 0
    downloads: int = 0
    recent_views: int = 0
    recent_downloads: int = 0
    stars: int = 0
    watchers: int = 0


class Link(HangarModel):
    id: int = 0
    name: str = ""
    url: Optional[str] = None


class LinkSection(HangarModel):
    """A titled group of links shown in the project sidebar."""

    id: int = 0
    type: str = ""
    title: Optional[str] = None
    links: list[Link] = Field(default_factory=list)


class License(HangarModel):
    name: Optional[str] = None
    url: Optional[str] = None
    type: str = ""


class Donation(HangarModel):
    enable: bool = False
    subject: Optional[str] = None


class ProjectSettings(HangarModel):
    """Links, license, tags and keywords configured for a project."""

    links: list[LinkSection] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    license: License = Field(default_factory=License)
    keywords: list[str] = Field(default_factory=list)
    donation: Donation = Field(default_factory=Donation)


class Project(HangarModel):
    """A plugin listing on Hangar."""

    id: int
    name: str
    namespace: Namespace = Field(default_factory=Namespace)
    category: str = ""
    description: str = ""
    created_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None
    stats: ProjectStats = Field(default_factory=ProjectStats)
    visibility: str = ""
    avatar_url: Optional[str] = None
    settings: ProjectSettings = Field(default_factory=ProjectSettings)


# --- Versions ---


class FileInfo(HangarModel):
    name: str = ""
    size_bytes: int = 0
    sha256_hash: str = Field(default="", alias="sha256Hash")


class DownloadInfo(HangarModel):
    """Where to download a version for one platform.

    The API populates either ``download_url`` (hosted on Hangar) or
    ``external_url``. Empty strings are normalised to ``None``.
    """

    file_info: Optional[FileInfo] = None
    external_url: Optional[str] = None
    download_url: Optional[str] = None

    @field_validator("external_url", "download_url", mode="before")
    @classmethod
    def blank_urls_to_none(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @property
    def url(self) -> Optional[str]:
        """The hosted URL when present, otherwise the external URL."""
        return self.download_url or self.external_url


class PluginDependency(HangarModel):
    name: str
    project_id: Optional[int] = None
    required: bool = False
    external_url: Optional[str] = None
    platform: Optional[str] = None

    @field_validator("external_url", mode="before")
    @classmethod
    def blank_url_to_none(cls, value: Any) -> Any:
        return _blank_to_none(value)


class Channel(HangarModel):
    """A release track such as ``Release``, ``Beta`` or ``Alpha``."""

    name: str = ""
    description: Optional[str] = None
    color: Optional[str] = None
    flags: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class VersionStats(HangarModel):
    total_downloads: int = 0
    platform_downloads: dict[str, int] = Field(default_factory=dict)


class Version(HangarModel):
    """A release of a project."""

    id: int
    project_id: Optional[int] = None
    name: str
    description: str = ""
    created_at: Optional[datetime] = None
    author: str = ""
    visibility: str = ""
    review_state: str = ""
    stats: VersionStats = Field(default_factory=VersionStats)
    downloads: dict[str, DownloadInfo] = Field(default_factory=dict)
    plugin_dependencies: dict[str, list[PluginDependency]] = Field(default_factory=dict)
    platform_dependencies: dict[str, list[str]] = Field(default_factory=dict)
    channel: Channel = Field(default_factory=Channel)
    pinned_status: str = ""


# --- Users ---


class Role(HangarModel):
    """A site or project role.

    The API sends roles either as objects or as bare numeric ids; a bare id
    decodes to ``Role(id=<id>)``.
    """

    id: Optional[int] = None
    name: str = Field(default="", validation_alias=AliasChoices("name", "title", "value"))
    color: Optional[str] = None
    rank: Optional[int] = None

    @model_validator(mode="before")
    @classmethod
    def from_bare_id(cls, data: Any) -> Any:
        if isinstance(data, int) and not isinstance(data, bool):
            return {"id": data}
        return data

    def __str__(self) -> str:
        if self.name:
            return self.name
        return str(self.id) if self.id is not None else ""


class User(HangarModel):
    """A Hangar account."""

    name: str
    tagline: Optional[str] = None
    join_date: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("joinDate", "createdAt", "join_date"),
    )
    roles: list[Role] = Field(default_factory=list)
    project_count: int = 0
    locked: bool = False
    avatar_url: Optional[str] = None
    socials: dict[str, str] = Field(default_factory=dict)
    is_organization: bool = False

    @property
    def role_names(self) -> str:
        """Roles joined with ``", "`` for display."""
        return ", ".join(str(role) for role in self.roles)


class Author(User):
    """A user who has published at least one project."""


class StaffMember(User):
    """A member of the Hangar staff."""


class ProjectMember(HangarModel):
    """A user's membership in a project team."""

    user: str
    roles: list[Role] = Field(default_factory=list)
    accepted: bool = True

    @property
    def role_names(self) -> str:
        return ", ".join(str(role) for role in self.roles)


# --- Pages & statistics ---


class Page(HangarModel):
    """A Markdown page of a project."""

    id: Optional[int] = None
    name: str = ""
    slug: str = ""
    contents: str = ""


class DailyStats(HangarModel):
    """Metrics for a single day."""

    downloads: int = 0
    views: int = 0


ProjectStatsData = dict[str, DailyStats]
"""Date string (``YYYY-MM-DD``) to daily metrics for a project."""

VersionStatsData = dict[str, DailyStats]
"""Date string (``YYYY-MM-DD``) to daily metrics for a version."""


# --- Pagination ---


class Pagination(HangarModel):
    """Page metadata included in every list envelope."""

    count: int = 0
    limit: int = 0
    offset: int = 0


T = TypeVar("T")


class PaginatedResult(HangarModel, Generic[T]):
    """The ``{pagination, result}`` envelope of list endpoints.

    ``result`` keeps the order chosen by the server.
    """

    pagination: Pagination = Field(default_factory=Pagination)
    result: list[T] = Field(default_factory=list)


ProjectList = PaginatedResult[Project]
VersionList = PaginatedResult[Version]
UserList = PaginatedResult[User]
AuthorList = PaginatedResult[Author]
MemberList = PaginatedResult[ProjectMember]

STATS_ADAPTER: TypeAdapter[dict[str, DailyStats]] = TypeAdapter(dict[str, DailyStats])
STAFF_ADAPTER: TypeAdapter[list[StaffMember]] = TypeAdapter(list[StaffMember])
PROJECTS_ADAPTER: TypeAdapter[list[Project]] = TypeAdapter(list[Project])


# --- Configuration ---


class OutputFormat(str, enum.Enum):
    """Rendering mode of the CLI's primary output."""

    TABLE = "table"
    JSON = "json"


class Settings(BaseModel):
    """Effective CLI settings after precedence resolution.

    Built once by :func:`~pyhangar.config.load_settings` and handed to every
    command through the Typer context.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Hangar API base URL")
    api_token: Optional[str] = Field(default=None, description="Bearer token")
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, description="Timeout in seconds; 0 means the default"
    )
    output: OutputFormat = Field(default=OutputFormat.TABLE, description="table or json")

    @field_validator("api_token", mode="before")
    @classmethod
    def blank_token_to_none(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("base_url", mode="before")
    @classmethod
    def default_base_url(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_BASE_URL
        return value

    @field_validator("timeout", mode="before")
    @classmethod
    def zero_timeout_to_default(cls, value: Any) -> Any:
        if value is None or (not isinstance(value, bool) and value == 0):
            return DEFAULT_TIMEOUT
        return value

    @field_validator("output", mode="before")
    @classmethod
    def lower_output(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def client_config(self) -> ClientConfig:
        """Build the :class:`ClientConfig` for these settings."""
        return ClientConfig(base_url=self.base_url, token=self.api_token, timeout=self.timeout)


class ClientConfig(BaseModel):
    """Transport configuration of a Hangar client.

    An empty ``base_url`` falls back to :data:`DEFAULT_BASE_URL` and a zero
    or missing ``timeout`` to :data:`DEFAULT_TIMEOUT`. ``transport`` lets
    callers (and tests) inject an ``httpx`` transport such as
    :class:`httpx.MockTransport`; it must match the client flavour (sync or
    async).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    base_url: str = DEFAULT_BASE_URL
    token: Optional[str] = None
    timeout: Optional[float] = DEFAULT_TIMEOUT
    transport: Optional[Union[httpx.BaseTransport, httpx.AsyncBaseTransport]] = None

    @field_validator("base_url", mode="before")
    @classmethod
    def default_base_url(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_BASE_URL
        return value.rstrip("/") if isinstance(value, str) else value

    @field_validator("timeout", mode="before")
    @classmethod
    def default_timeout(cls, value: Any) -> Any:
        if not value:
            return DEFAULT_TIMEOUT
        return value

    @field_validator("token", mode="before")
    @classmethod
    def blank_token_to_none(cls, value: Any) -> Any:
        return _blank_to_none(value)
