from __future__ import annotations

from fedisync.adapters.http_resilience import ResilientClient
from fedisync.config.http_resilience import RateLimit, ResilienceConfig


def test_resilient_client_applies_config() -> None:
    client = ResilientClient(
        ResilienceConfig(
            name="mastodon",
            base_url="https://mastodon.example",
            timeout_seconds=12.0,
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
            default_headers={"Authorization": "Bearer token"},
        )
    )
    inner = client._client  # noqa: SLF001  # type: ignore[reportPrivateUsage]

    assert inner.base_url.host == "mastodon.example"
    assert inner.headers["Authorization"] == "Bearer token"
    assert inner.timeout.read == 12.0
    assert inner.follow_redirects is True
    assert inner.event_hooks == {"request": [], "response": []}
    assert client._limiter is not None  # noqa: SLF001  # type: ignore[reportPrivateUsage]


def test_resilient_client_without_rate_limit_or_base_url() -> None:
    client = ResilientClient(ResilienceConfig(name="shared-lists"))
    inner = client._client  # noqa: SLF001  # type: ignore[reportPrivateUsage]

    assert client._limiter is None  # noqa: SLF001  # type: ignore[reportPrivateUsage]
    assert str(inner.base_url) == ""
    assert "Authorization" not in inner.headers
