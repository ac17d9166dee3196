"""Application services for exporting and importing filters and tags.

Import runs the whole review pipeline: fetch the current remote state, normalize both
sides, reconcile by name, show the diff, ask once, then upload only the new records.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .diff import render_diff
from .errors import ImportCancelled, MalformedRecordError
from .normalize import normalize, normalize_all
from .reconcile import reconcile
from .records import RecordSet, natural_key
from .upload import UploadResult, upload

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from .ports import Confirm, Display, RecordRemote, RecordWriter
    from .records import Record, RecordKind, SourcedRecord

log = getLogger(__name__)

REMOTE_SOURCE = "remote"


@dataclass(slots=True)
class ExportResult:
    """Outcome of an export run."""

    kind: RecordKind
    written: list[Path] = field(default_factory=list)
    skipped: int = 0


@dataclass(slots=True)
class ImportResult:
    """Outcome of an import run that was not cancelled."""

    kind: RecordKind
    candidates: int = 0
    new: int = 0
    duplicate: int = 0
    skipped: int = 0
    uploaded: int = 0
    diff: str = ""


def export_records(
    kind: RecordKind,
    *,
    remote: RecordRemote,
    writer: RecordWriter,
) -> ExportResult:
    """Download the current records of ``kind`` and write one normalized file each."""

    records = remote.fetch_records(kind)
    normalized, skipped = normalize_all(records, kind, source=REMOTE_SOURCE)
    result = ExportResult(kind=kind, skipped=skipped)
    for record in normalized:
        key = natural_key(record, kind)
        log.info("Exporting %s: %s", kind.label, key)
        result.written.append(writer(key, record))
    return result


def build_record_set(kind: RecordKind, records: Iterable[SourcedRecord]) -> tuple[RecordSet, int]:
    """Normalize sourced records into a set, skipping malformed ones with a warning."""

    record_set = RecordSet(kind)
    skipped = 0
    for item in records:
        try:
            record_set.add(normalize(item.record, kind, source=item.source), source=item.source)
        except MalformedRecordError as exc:
            skipped += 1
            log.warning("Skipping %s: %s", kind.label, exc)
    return record_set, skipped


def load_current(kind: RecordKind, remote: RecordRemote) -> RecordSet:
    records = remote.fetch_records(kind)
    normalized, _skipped = normalize_all(records, kind, source=REMOTE_SOURCE)
    return RecordSet.from_records(kind, normalized, source=REMOTE_SOURCE)


def import_records(
    kind: RecordKind,
    *,
    remote: RecordRemote,
    candidates: Iterable[SourcedRecord],
    confirm: Confirm,
    display: Display,
    confirm_each: bool = False,
) -> ImportResult:
    """Import the candidate records that do not exist on the remote yet.

    With ``confirm_each`` every new record is shown and confirmed on its own (used for
    records fetched from a URL); otherwise one confirmation covers the whole batch.
    Raises ``ImportCancelled`` when the user declines; nothing is uploaded after that.
    """

    current = load_current(kind, remote)
    candidate_set, skipped = build_record_set(kind, candidates)
    split = reconcile(current, candidate_set)

    result = ImportResult(
        kind=kind,
        candidates=len(candidate_set),
        new=len(split.new),
        duplicate=len(split.duplicate),
        skipped=skipped,
    )
    result.diff = render_diff(current, candidate_set)
    if result.diff:
        display(result.diff)

    if not split.new:
        log.info("Nothing to import: no new %ss among %d candidates", kind.label, result.candidates)
        return result

    new_records = split.new.sorted_records()
    if confirm_each:
        result.uploaded = _upload_each(
            kind, new_records, remote=remote, confirm=confirm, display=display
        )
        return result

    if not confirm(f"Do you want to import {len(new_records)} new {kind.label}(s) (y/n)? "):
        raise ImportCancelled(f"Import of {kind.label}s cancelled by user")
    uploaded: UploadResult = upload(kind, new_records, remote)
    result.uploaded = uploaded.uploaded
    return result


def _upload_each(
    kind: RecordKind,
    records: list[Record],
    *,
    remote: RecordRemote,
    confirm: Confirm,
    display: Display,
) -> int:
    uploaded = 0
    for record in records:
        display(f"The following {kind.label} will be imported:")
        display(json.dumps(record, indent=2, ensure_ascii=False))
        if not confirm("Do you want to continue? (y/n) "):
            key = natural_key(record, kind)
            raise ImportCancelled(f"Import of {kind.label} {key!r} cancelled by user")
        uploaded += upload(kind, [record], remote).uploaded
    return uploaded
