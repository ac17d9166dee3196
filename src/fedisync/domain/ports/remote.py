"""Ports for reading from and writing to the remote server."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fedisync.domain.records import Record, RecordKind


@runtime_checkable
class RecordRemote(Protocol):
    """Remote endpoint holding the user's filters and followed tags."""

    def fetch_records(self, kind: RecordKind) -> list[Record]:
        """Return the raw records of ``kind`` currently stored on the server."""
        ...

    def create_filters(self, filters: Sequence[Record]) -> None:
        """Create all ``filters`` with a single request."""
        ...

    def follow_tag(self, tag: Record) -> None:
        """Follow one tag."""
        ...


__all__ = ["RecordRemote"]
