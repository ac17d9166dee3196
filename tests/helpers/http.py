"""MockTransport-backed client factories for adapter tests."""

from __future__ import annotations

from collections.abc import Callable

import httpx

from fedisync.adapters.http_resilience import ResilientClient
from fedisync.config.http_resilience import ResilienceConfig

type Handler = Callable[[httpx.Request], httpx.Response]


def make_client_factory(handler: Handler) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            transport=httpx.MockTransport(async_handler),
            base_url=resilience.base_url or "",
            headers=dict(resilience.default_headers or {}),
        )
        return client

    return factory
