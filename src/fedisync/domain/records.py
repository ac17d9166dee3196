"""Record model shared by every sync workflow.

A record is the plain JSON object the server (or a backup file) hands us. We keep it as
a mapping rather than a typed model so that fields we do not know about survive an
export/import round-trip untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, Any

from .errors import MalformedRecordError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

log = getLogger(__name__)

type Record = dict[str, Any]


class RecordKind(StrEnum):
    """The two record variants; the value doubles as the config section name."""

    FILTER = "filters"
    TAG = "tags"

    @property
    def key_field(self) -> str:
        return "title" if self is RecordKind.FILTER else "name"

    @property
    def label(self) -> str:
        return "filter" if self is RecordKind.FILTER else "tag"


def natural_key(record: Record, kind: RecordKind, *, source: str | None = None) -> str:
    """Return the unique name of ``record`` (``title`` for filters, ``name`` for tags)."""

    value = record.get(kind.key_field)
    if not isinstance(value, str) or not value:
        raise MalformedRecordError(
            f"{kind.label} without a string '{kind.key_field}'",
            source=source,
        )
    return value


@dataclass(slots=True)
class RecordSet:
    """Records of one kind keyed by their natural name.

    Adding a record whose key is already present replaces the earlier one. The
    replacement is logged so that a colliding import never goes unnoticed.
    """

    kind: RecordKind
    _records: dict[str, Record] = field(default_factory=dict, init=False, repr=False)

    @classmethod
    def from_records(
        cls,
        kind: RecordKind,
        records: Iterable[Record],
        *,
        source: str | None = None,
    ) -> RecordSet:
        record_set = cls(kind)
        for record in records:
            record_set.add(record, source=source)
        return record_set

    def add(self, record: Record, *, source: str | None = None) -> Record | None:
        """Insert ``record`` and return the record it replaced, if any."""

        key = natural_key(record, self.kind, source=source)
        previous = self._records.get(key)
        if previous is not None:
            log.warning(
                "Duplicate %s %r%s; the later record replaces the earlier one",
                self.kind.label,
                key,
                f" in {source}" if source else "",
            )
        self._records[key] = record
        return previous

    def get(self, key: str) -> Record | None:
        return self._records.get(key)

    def keys(self) -> set[str]:
        return set(self._records)

    def items(self) -> list[tuple[str, Record]]:
        return list(self._records.items())

    def sorted_records(self) -> list[Record]:
        return [self._records[key] for key in sorted(self._records)]

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)


@dataclass(frozen=True, slots=True)
class SourcedRecord:
    """A raw record together with where it was read from (file name, URL, ...)."""

    record: Record
    source: str
