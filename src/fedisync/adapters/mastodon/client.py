"""HTTP client for the Mastodon filter and followed-tag endpoints."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from fedisync.adapters.http_resilience import ResilientClient
from fedisync.adapters.responses import decode_json, send_checked
from fedisync.config.http_resilience import RateLimit, ResilienceConfig
from fedisync.domain.records import RecordKind

from .schema import ErrorResponse, parse_records

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    import httpx

    from fedisync.config.instance import InstanceConfig
    from fedisync.domain.records import Record

log = getLogger(__name__)

FILTERS_PATH: Final[str] = "/api/v2/filters"
FOLLOWED_TAGS_PATH: Final[str] = "/api/v1/followed_tags"
TAG_FOLLOWING_PATH: Final[str] = "/api/v1/tag_following"
FOLLOWED_TAGS_PAGE_SIZE: Final[int] = 200
MAX_PAGES: Final[int] = 100

_FETCH_PATHS: Final[dict[RecordKind, str]] = {
    RecordKind.FILTER: FILTERS_PATH,
    RecordKind.TAG: FOLLOWED_TAGS_PATH,
}


def build_resilience_config(config: InstanceConfig) -> ResilienceConfig:
    return ResilienceConfig(
        name="mastodon",
        base_url=config.instance_url,
        timeout_seconds=config.timeout_seconds,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        default_headers={
            "Authorization": f"Bearer {config.access_token}",
            "Accept": "application/json",
        },
    )


def describe_error(response: httpx.Response) -> str | None:
    try:
        payload = ErrorResponse.model_validate_json(response.content)
    except ValidationError:
        text = response.text.strip()
        return text[:200] or None
    if payload.error_description:
        return f"{payload.error} ({payload.error_description})"
    return payload.error


class MastodonClient:
    """Reads and writes the user's filters and followed tags.

    Each public call runs to completion before returning; the underlying async client
    lives only for the duration of that call.
    """

    def __init__(
        self,
        *,
        config: InstanceConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = build_resilience_config(config)
        self._client_factory = client_factory or ResilientClient

    def fetch_records(self, kind: RecordKind) -> list[Record]:
        return asyncio.run(self._fetch_records_async(kind))

    def create_filters(self, filters: Sequence[Record]) -> None:
        asyncio.run(self._post_async(FILTERS_PATH, list(filters)))

    def follow_tag(self, tag: Record) -> None:
        asyncio.run(self._post_async(TAG_FOLLOWING_PATH, tag))

    async def _fetch_records_async(self, kind: RecordKind) -> list[Record]:
        path: str | None = _FETCH_PATHS[kind]
        params: dict[str, str] | None = (
            {"limit": str(FOLLOWED_TAGS_PAGE_SIZE)} if kind is RecordKind.TAG else None
        )
        records: list[Record] = []
        pages = 0

        async with self._client_factory(self._resilience) as client:
            while path is not None and pages < MAX_PAGES:
                response = await send_checked(
                    client,
                    "GET",
                    path,
                    params=params,
                    describe_error=describe_error,
                )
                source = str(response.url)
                payload = decode_json(response.content, source=source)
                records.extend(parse_records(kind, payload, source=source, allow_single=False))
                pages += 1
                path = _next_page(response)
                params = None

        if path is not None:
            log.warning(
                "Stopped after %d pages of %ss; remaining pages were not fetched: %s",
                pages,
                kind.label,
                path,
            )
        log.info("Fetched %d %ss from %s", len(records), kind.label, self._config.instance_url)
        return records

    async def _post_async(self, path: str, body: object) -> None:
        async with self._client_factory(self._resilience) as client:
            await send_checked(client, "POST", path, json=body, describe_error=describe_error)


def _next_page(response: httpx.Response) -> str | None:
    link = response.links.get("next")
    if not link:
        return None
    return link.get("url")
