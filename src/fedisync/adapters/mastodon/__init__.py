"""Public interface for the Mastodon adapter."""

from __future__ import annotations

from .client import (
    FILTERS_PATH,
    FOLLOWED_TAGS_PATH,
    TAG_FOLLOWING_PATH,
    MastodonClient,
    build_resilience_config,
)
from .schema import FilterPayload, TagPayload, parse_records, validate_record

__all__ = [
    "FILTERS_PATH",
    "FOLLOWED_TAGS_PATH",
    "TAG_FOLLOWING_PATH",
    "FilterPayload",
    "MastodonClient",
    "TagPayload",
    "build_resilience_config",
    "parse_records",
    "validate_record",
]
