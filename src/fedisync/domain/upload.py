"""Push accepted records to the remote endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import SyncError
from .records import RecordKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .ports import RecordRemote
    from .records import Record

log = getLogger(__name__)


@dataclass(slots=True)
class UploadResult:
    """How many requests were sent and how many records they carried."""

    kind: RecordKind
    requests: int = 0
    uploaded: int = 0


def upload(kind: RecordKind, records: Sequence[Record], remote: RecordRemote) -> UploadResult:
    """Send ``records`` to ``remote``.

    Filters go out as one batch request. Tags are followed one request at a time and
    the loop stops at the first failure; tags sent before it stay followed.
    """

    result = UploadResult(kind=kind)
    if not records:
        return result

    if kind is RecordKind.FILTER:
        remote.create_filters(list(records))
        result.requests = 1
        result.uploaded = len(records)
        log.info("Uploaded %d filters in one request", result.uploaded)
        return result

    for record in records:
        try:
            remote.follow_tag(record)
        except SyncError:
            log.error(
                "Upload aborted after %d of %d tags; remaining tags were not sent",
                result.uploaded,
                len(records),
            )
            raise
        result.requests += 1
        result.uploaded += 1
        log.info("Followed tag %s", record.get("name"))
    return result
