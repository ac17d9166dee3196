"""Domain port definitions for adapters."""

from __future__ import annotations

from .interaction import Confirm, Display, RecordWriter
from .remote import RecordRemote

__all__ = [
    "Confirm",
    "Display",
    "RecordRemote",
    "RecordWriter",
]
