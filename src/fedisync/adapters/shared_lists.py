"""Fetch publicly shared filter and tag lists from a URL."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from fedisync.config.http_resilience import DEFAULT_TIMEOUT_SECONDS, ResilienceConfig
from fedisync.domain.records import SourcedRecord

from .filesystem import save_download
from .http_resilience import ResilientClient
from .mastodon.schema import parse_records
from .responses import decode_json, send_checked

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from fedisync.domain.records import RecordKind

log = getLogger(__name__)


def _default_resilience_config() -> ResilienceConfig:
    return ResilienceConfig(
        name="shared-lists",
        timeout_seconds=DEFAULT_TIMEOUT_SECONDS,
        default_headers={"Accept": "application/json"},
    )


@dataclass(slots=True)
class SharedListFetcher:
    """Downloads a shared list without credentials.

    The document may hold a single record or an array of records. When
    ``download_dir`` is set a pretty-printed copy is kept there.
    """

    resilience: ResilienceConfig = field(default_factory=_default_resilience_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(default=ResilientClient)
    download_dir: Path | None = None

    def __call__(self, kind: RecordKind, url: str) -> list[SourcedRecord]:
        payload = asyncio.run(self._fetch_async(url))
        records = parse_records(kind, payload, source=url)
        if self.download_dir is not None:
            save_download(self.download_dir, url, payload)
        log.info("Fetched %d %ss from %s", len(records), kind.label, url)
        return [SourcedRecord(record=record, source=url) for record in records]

    async def _fetch_async(self, url: str) -> object:
        async with self.client_factory(self.resilience) as client:
            response = await send_checked(client, "GET", url)
        return decode_json(response.content, source=url)
