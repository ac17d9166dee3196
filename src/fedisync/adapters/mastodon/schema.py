"""Pydantic models describing the Mastodon filter and tag payloads.

The models only validate shape; callers keep working with the original mappings so
that fields not modelled here survive an export/import round-trip.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, ValidationError

from fedisync.domain.errors import MalformedRecordError, ParseError
from fedisync.domain.records import RecordKind

if TYPE_CHECKING:
    from fedisync.domain.records import Record

log = getLogger(__name__)


class MastodonBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class FilterKeywordPayload(MastodonBaseModel):
    keyword: str
    whole_word: bool | None = None
    id: str | int | None = None


class FilterPayload(MastodonBaseModel):
    title: str
    keywords: list[FilterKeywordPayload]
    context: list[str] | None = None
    filter_action: str | None = None
    expires_at: str | None = None
    id: str | int | None = None


class TagHistoryEntry(MastodonBaseModel):
    # any entry shape is accepted; normalize drops history
    day: str | int | None = None
    uses: str | int | None = None
    accounts: str | int | None = None


class TagPayload(MastodonBaseModel):
    name: str
    url: str | None = None
    following: bool | None = None
    history: list[TagHistoryEntry] | None = None
    id: str | int | None = None


class ErrorResponse(MastodonBaseModel):
    error: str
    error_description: str | None = None


_MODELS: dict[RecordKind, type[MastodonBaseModel]] = {
    RecordKind.FILTER: FilterPayload,
    RecordKind.TAG: TagPayload,
}


def validate_record(kind: RecordKind, payload: object, *, source: str) -> Record:
    """Return ``payload`` unchanged if it has the shape of a ``kind`` record."""

    if not isinstance(payload, dict):
        kind_name = type(payload).__name__
        raise MalformedRecordError(f"expected a JSON object, got {kind_name}", source=source)
    try:
        _MODELS[kind].model_validate(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or kind.label
        raise MalformedRecordError(f"{location}: {first['msg']}", source=source) from exc
    record: dict[str, Any] = payload
    return record


def parse_records(
    kind: RecordKind,
    payload: object,
    *,
    source: str,
    allow_single: bool = True,
) -> list[Record]:
    """Validate a decoded JSON document holding one record or a list of records.

    Inside a list a malformed entry is skipped with a warning; a document that holds a
    single malformed record raises ``MalformedRecordError``.
    """

    if isinstance(payload, dict) and allow_single:
        return [validate_record(kind, payload, source=source)]
    if not isinstance(payload, list):
        expected = "a JSON object or array" if allow_single else "a JSON array"
        raise ParseError(f"Expected {expected} of {kind.label}s from {source}", source=source)

    records: list[Record] = []
    for index, item in enumerate(payload):
        try:
            records.append(validate_record(kind, item, source=f"{source}[{index}]"))
        except MalformedRecordError as exc:
            log.warning("Skipping %s: %s", kind.label, exc)
    return records
