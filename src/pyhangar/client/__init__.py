"""Hangar API clients.

Provides a blocking and an asyncio client that share one request/response
contract layer:

    :mod:`~pyhangar.client.endpoints` -- argument validation, path escaping
    and query defaults for each operation.
    :mod:`~pyhangar.client.response` -- status classification and decoding.
    :mod:`~pyhangar.client.lookup` -- second steps of derived lookups.

Classes:
    :class:`HangarClient` -- blocking client backed by :class:`httpx.Client`.
    :class:`AsyncHangarClient` -- non-blocking client backed by
    :class:`httpx.AsyncClient`.

Example::

    from pyhangar.client import ClientConfig, HangarClient

    with HangarClient(ClientConfig(token="...")) as client:
        url = client.get_download_url("Owner", "myplugin", "1.2.0", "PAPER")
"""

from pyhangar.client.async_client import AsyncHangarClient
from pyhangar.client.sync_client import HangarClient
from pyhangar.models import ClientConfig

__all__ = ["AsyncHangarClient", "ClientConfig", "HangarClient"]
