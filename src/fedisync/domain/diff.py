"""Unified diff of two record sets for review before a write."""

from __future__ import annotations

import difflib
import json
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from .records import RecordSet

DIFF_CONTEXT_LINES: Final[int] = 3
JSON_INDENT: Final[int] = 2


def render_records(records: RecordSet) -> list[str]:
    """Pretty-print each record as one contiguous JSON block, ordered by name."""

    lines: list[str] = []
    for record in records.sorted_records():
        lines.extend(json.dumps(record, indent=JSON_INDENT, ensure_ascii=False).splitlines())
    return lines


def render_diff(
    current: RecordSet,
    candidate: RecordSet,
    *,
    from_label: str | None = None,
    to_label: str | None = None,
) -> str:
    """Return a unified diff from ``current`` to ``candidate``.

    The comparison is textual: re-ordered fields show up as changes. Two identical sets
    yield an empty string.
    """

    label = current.kind.label.capitalize()
    diff = difflib.unified_diff(
        render_records(current),
        render_records(candidate),
        fromfile=from_label or f"Current {label}s",
        tofile=to_label or f"Import {label}s",
        n=DIFF_CONTEXT_LINES,
        lineterm="",
    )
    text = "\n".join(diff)
    return text + "\n" if text else ""


def diff_hunks(diff_text: str) -> list[str]:
    return [line for line in diff_text.splitlines() if line.startswith("@@")]
