"""Ports for the blocking user interaction around a write."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from fedisync.domain.records import Record


@runtime_checkable
class Confirm(Protocol):
    """Ask one yes/no question; ``True`` means go ahead."""

    def __call__(self, prompt: str) -> bool: ...


@runtime_checkable
class Display(Protocol):
    """Show text (a diff, a record) to the user."""

    def __call__(self, text: str) -> None: ...


@runtime_checkable
class RecordWriter(Protocol):
    """Persist one exported record under its natural key and return where it went."""

    def __call__(self, key: str, record: Record) -> Path: ...


__all__ = ["Confirm", "Display", "RecordWriter"]
