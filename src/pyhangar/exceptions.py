"""Exception hierarchy for pyhangar.

All exceptions inherit from :class:`HangarError`, which carries the name of
the failed ``operation`` and a ``detail`` message. ``str(exc)`` renders as
``failed to <operation>: <detail>`` so that errors read the same whether
they are printed by the CLI or logged by a library user. Callers that need
to branch on the failure class use the subclasses (or ``status_code`` on
:class:`HTTPStatusError`) instead of matching on text.

Subclass hierarchy::

    HangarError
    +-- InvalidArgumentError      (bad argument, raised before any I/O)
    +-- TransportError            (DNS, connect, read failures)
    |   +-- RequestTimeoutError
    +-- HTTPStatusError           (non-2xx response)
    |   +-- NotFoundError         (404)
    +-- DecodeError               (malformed JSON or unexpected shape)
    +-- ResolutionError           (derived lookups)
    |   +-- VersionNotFoundError
    |   +-- DownloadUnavailableError
    +-- ConfigError

Every class maps to :data:`~pyhangar.exit_codes.EXIT_FAILURE` in the CLI.
"""

from __future__ import annotations

from typing import Optional

from pyhangar.exit_codes import EXIT_FAILURE


class HangarError(Exception):
    """Base exception for all pyhangar errors.

    Args:
        detail: Human-readable description of what went wrong.
        operation: Logical operation that failed (e.g. ``"get project"``).
            When given, the message is prefixed with ``failed to``.
    """

    exit_code: int = EXIT_FAILURE

    def __init__(self, detail: str, *, operation: Optional[str] = None) -> None:
        self.detail = detail
        self.operation = operation
        message = f"failed to {operation}: {detail}" if operation else detail
        super().__init__(message)


class InvalidArgumentError(HangarError):
    """Raised when a required argument is empty or out of range."""


class TransportError(HangarError):
    """Raised on network-level failures (DNS resolution, connection refused, reset)."""


class RequestTimeoutError(TransportError):
    """Raised when the request exceeds the configured timeout."""


class HTTPStatusError(HangarError):
    """Raised when the API answers with a non-2xx status.

    Args:
        status_code: The HTTP status code of the response.
        body: Raw response body text (best effort, may be empty).
        operation: Logical operation that failed.
    """

    def __init__(
        self,
        status_code: int,
        body: str = "",
        *,
        operation: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"API request failed with status {status_code}: {body}",
            operation=operation,
        )


class NotFoundError(HTTPStatusError):
    """Raised when the API returns HTTP 404."""


class DecodeError(HangarError):
    """Raised when a 2xx response body cannot be decoded into the expected type."""


class ResolutionError(HangarError):
    """Raised when a derived, multi-step lookup cannot produce a result."""


class VersionNotFoundError(ResolutionError):
    """Raised when a named version is absent from the scanned version page."""


class DownloadUnavailableError(ResolutionError):
    """Raised when a version has no hosted or external URL for a platform."""


class ConfigError(HangarError):
    """Raised for configuration problems (unreadable file, invalid YAML, bad values)."""
