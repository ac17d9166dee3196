"""Translate httpx outcomes into the sync error taxonomy."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING, Unpack

import httpx

from fedisync.domain.errors import ParseError, RemoteRejected, TransportError

if TYPE_CHECKING:
    from collections.abc import Callable

    from .http_resilience import RequestOptions, ResilientClient

log = getLogger(__name__)

_DETAIL_LIMIT = 200


async def send_checked(
    client: ResilientClient,
    method: str,
    url: str,
    *,
    describe_error: Callable[[httpx.Response], str | None] | None = None,
    **kwargs: Unpack[RequestOptions],
) -> httpx.Response:
    """Send one request and raise unless the server answered with a 2xx status."""

    try:
        response = await client.request(method, url, **kwargs)
    except httpx.HTTPError as exc:
        raise TransportError(f"{method} {url} failed: {exc}", url=url) from exc

    if not response.is_success:
        detail = describe_error(response) if describe_error else _response_detail(response)
        log.debug("%s %s answered %s: %s", method, url, response.status_code, detail)
        raise RemoteRejected(response.status_code, url=str(response.url), detail=detail)
    return response


def decode_json(content: bytes | str, *, source: str) -> object:
    try:
        return json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ParseError(f"Invalid JSON from {source}: {exc}", source=source) from exc


def _response_detail(response: httpx.Response) -> str | None:
    text = response.text.strip()
    return text[:_DETAIL_LIMIT] or None
