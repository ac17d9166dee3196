"""Strip server-assigned and volatile fields so records compare by content."""

from __future__ import annotations

import copy
from collections.abc import MutableMapping, Sequence
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import MalformedRecordError
from .records import RecordKind, natural_key

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .records import Record

log = getLogger(__name__)

IDENTITY_FIELD = "id"
VOLATILE_TAG_FIELDS = ("history",)


def normalize(record: Record, kind: RecordKind, *, source: str | None = None) -> Record:
    """Return a copy of ``record`` without ids (at every level) and volatile fields.

    Normalizing an already normalized record returns an equal record.
    """

    natural_key(record, kind, source=source)
    normalized = copy.deepcopy(record)
    normalized.pop(IDENTITY_FIELD, None)

    if kind is RecordKind.FILTER:
        keywords = normalized.get("keywords")
        if isinstance(keywords, str | bytes) or not isinstance(keywords, Sequence):
            raise MalformedRecordError("filter without a 'keywords' list", source=source)
        for keyword in keywords:
            if not isinstance(keyword, MutableMapping):
                raise MalformedRecordError("filter keyword is not an object", source=source)
            keyword.pop(IDENTITY_FIELD, None)
    else:
        for name in VOLATILE_TAG_FIELDS:
            normalized.pop(name, None)

    return normalized


def normalize_all(
    records: Iterable[Record],
    kind: RecordKind,
    *,
    source: str | None = None,
) -> tuple[list[Record], int]:
    """Normalize a batch, skipping malformed records with a warning.

    Returns the normalized records and the number of records that were skipped.
    """

    normalized: list[Record] = []
    skipped = 0
    for record in records:
        try:
            normalized.append(normalize(record, kind, source=source))
        except MalformedRecordError as exc:
            skipped += 1
            log.warning("Skipping %s: %s", kind.label, exc)
    return normalized, skipped
