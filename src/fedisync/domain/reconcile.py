"""Classify candidate records as new or already present on the remote."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger

from .records import RecordSet

log = getLogger(__name__)


@dataclass(slots=True)
class ReconcileResult:
    """Candidate records split by whether their name already exists."""

    new: RecordSet
    duplicate: RecordSet

    def keys(self) -> set[str]:
        return self.new.keys() | self.duplicate.keys()


def reconcile(current: RecordSet, candidate: RecordSet) -> ReconcileResult:
    """Split ``candidate`` against ``current`` by natural key only.

    A candidate whose name exists in ``current`` is a duplicate even when its fields
    differ; field-level differences only show up in the rendered diff.
    """

    if current.kind is not candidate.kind:
        raise ValueError(f"Cannot reconcile {candidate.kind} against {current.kind}")

    new = RecordSet(candidate.kind)
    duplicate = RecordSet(candidate.kind)
    for key, record in candidate.items():
        target = duplicate if key in current else new
        target.add(record)

    for key in sorted(duplicate.keys()):
        log.info("%s already exists: %s", candidate.kind.label.capitalize(), key)
    log.debug(
        "Reconciled %d %ss: new=%d, duplicate=%d",
        len(candidate),
        candidate.kind.label,
        len(new),
        len(duplicate),
    )
    return ReconcileResult(new=new, duplicate=duplicate)
