"""Response classification and decoding shared by both clients.

Once a request has completed, the functions in this module turn the
:class:`httpx.Response` (or the transport exception) into either a typed
result or a :class:`~pyhangar.exceptions.HangarError`:

* :func:`transport_error` maps ``httpx`` transport failures.
* :func:`check_status` raises for any non-2xx status, embedding the status
  code and the raw body.
* ``decode_*`` functions decode a 2xx body into models. Pages and the
  latest-version shortcut also accept plain-text bodies.

All functions work on responses that have already been read, so they are
used unchanged by the blocking and the asyncio client.
"""

from __future__ import annotations

from typing import Any, TypeVar, Union

import httpx
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from pyhangar.exceptions import (
    DecodeError,
    HangarError,
    HTTPStatusError,
    NotFoundError,
    RequestTimeoutError,
    TransportError,
)
from pyhangar.models import (
    PROJECTS_ADAPTER,
    STAFF_ADAPTER,
    Page,
    Pagination,
    ProjectList,
    StaffMember,
    Version,
)

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")


def transport_error(exc: httpx.TransportError, operation: str) -> HangarError:
    """Map an ``httpx`` transport failure to the matching pyhangar error."""
    if isinstance(exc, httpx.TimeoutException):
        return RequestTimeoutError(f"request timed out: {exc}", operation=operation)
    return TransportError(f"HTTP request failed: {exc}", operation=operation)


def check_status(response: httpx.Response, operation: str) -> None:
    """Raise :class:`HTTPStatusError` (or :class:`NotFoundError`) for non-2xx responses."""
    if response.is_success:
        return
    body = _body_text(response)
    if response.status_code == 404:
        raise NotFoundError(response.status_code, body, operation=operation)
    raise HTTPStatusError(response.status_code, body, operation=operation)


def decode_json(response: httpx.Response, operation: str) -> Any:
    """Parse the body as JSON."""
    try:
        return response.json()
    except ValueError as exc:
        raise DecodeError(f"failed to decode response: {exc}", operation=operation) from exc


def decode_model(response: httpx.Response, model: type[M], operation: str) -> M:
    """Decode a JSON object body into *model*."""
    data = decode_json(response, operation)
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise DecodeError(_shape_message(exc), operation=operation) from exc


def decode_with(response: httpx.Response, adapter: TypeAdapter[T], operation: str) -> T:
    """Decode a JSON body with a :class:`~pydantic.TypeAdapter` (mappings, bare arrays)."""
    data = decode_json(response, operation)
    try:
        return adapter.validate_python(data)
    except PydanticValidationError as exc:
        raise DecodeError(_shape_message(exc), operation=operation) from exc


def decode_staff(response: httpx.Response, operation: str) -> list[StaffMember]:
    """Decode the staff listing, which is a bare JSON array.

    A pagination envelope is accepted too and flattened to its ``result``.
    """
    data = decode_json(response, operation)
    if isinstance(data, dict) and "result" in data:
        data = data["result"]
    try:
        return STAFF_ADAPTER.validate_python(data)
    except PydanticValidationError as exc:
        raise DecodeError(_shape_message(exc), operation=operation) from exc


def decode_project_list(response: httpx.Response, operation: str) -> ProjectList:
    """Decode a project listing that may be an envelope or a bare array.

    A bare array is wrapped in an envelope whose pagination describes the
    whole array.
    """
    data = decode_json(response, operation)
    try:
        if isinstance(data, list):
            projects = PROJECTS_ADAPTER.validate_python(data)
            return ProjectList(
                pagination=Pagination(count=len(projects), limit=len(projects), offset=0),
                result=projects,
            )
        return ProjectList.model_validate(data)
    except PydanticValidationError as exc:
        raise DecodeError(_shape_message(exc), operation=operation) from exc


def decode_page(response: httpx.Response, path: str, operation: str) -> Page:
    """Decode a project page.

    JSON bodies (by content type) hold a page object or a bare string; any
    other body is the raw Markdown of the page at *path*.
    """
    if _is_json(response):
        data = decode_json(response, operation)
        if isinstance(data, dict):
            try:
                return Page.model_validate(data)
            except PydanticValidationError as exc:
                raise DecodeError(_shape_message(exc), operation=operation) from exc
        if isinstance(data, str):
            return Page(name=path, slug=path, contents=data)
        raise DecodeError(
            f"unexpected page payload of type {type(data).__name__}", operation=operation
        )
    return Page(name=path, slug=path, contents=response.text)


def decode_latest(response: httpx.Response, operation: str) -> Union[Version, str]:
    """Decode the latest-version shortcut.

    Returns the full :class:`Version` when the server sent an object, or the
    version name when it sent plain text (or a JSON string).
    """
    text = response.text.strip()
    if text.startswith("{"):
        return decode_model(response, Version, operation)
    if text.startswith('"'):
        data = decode_json(response, operation)
        text = str(data).strip()
    if not text:
        raise DecodeError("empty latest-version response", operation=operation)
    return text


def _is_json(response: httpx.Response) -> bool:
    return "json" in response.headers.get("content-type", "").lower()


def _body_text(response: httpx.Response) -> str:
    try:
        return response.text
    except (UnicodeDecodeError, httpx.ResponseNotRead):
        return ""


def _shape_message(exc: PydanticValidationError) -> str:
    return f"unexpected response shape ({exc.error_count()} errors): {exc}"
