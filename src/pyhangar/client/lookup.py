"""Second steps of derived, multi-step lookups.

A download URL is resolved in two steps:

1. fetch one page of versions (:func:`pyhangar.client.endpoints.find_version`);
2. pick the named version from that page (:func:`find_version`) and choose
   the URL for the platform (:func:`resolve_download_url`).

Both helpers are pure, so the second step can be tested against fixed data
without a server.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from pyhangar.exceptions import DownloadUnavailableError, VersionNotFoundError
from pyhangar.models import DEFAULT_PLATFORM, Version


def find_version(versions: Iterable[Version], name: str) -> Version:
    """Return the first version whose name equals *name* exactly.

    Raises:
        VersionNotFoundError: If no version in *versions* is named *name*.
    """
    for version in versions:
        if version.name == name:
            return version
    raise VersionNotFoundError(f"version {name} not found", operation="find version")


def resolve_download_url(version: Version, platform: Optional[str] = None) -> str:
    """Choose the download URL of *version* for *platform*.

    The Hangar-hosted URL wins over the external URL.

    Raises:
        DownloadUnavailableError: If the platform is missing or has neither URL.
    """
    platform = platform or DEFAULT_PLATFORM
    info = version.downloads.get(platform)
    if info is None or info.url is None:
        raise DownloadUnavailableError(
            f"no download URL found for platform {platform}",
            operation="get download URL",
        )
    return info.url
