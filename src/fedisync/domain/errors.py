"""Error taxonomy for sync workflows and the adapters that feed them."""

from __future__ import annotations


class SyncError(RuntimeError):
    """Base class for failures reported by a sync action."""


class TransportError(SyncError):
    """Raised when a request cannot be built or the network call fails."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class RemoteRejected(SyncError):
    """Raised when the remote endpoint answers with a non-success status."""

    def __init__(self, status: int, *, url: str | None = None, detail: str | None = None) -> None:
        message = f"Remote rejected request with status {status}"
        if url:
            message += f" ({url})"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.status = status
        self.url = url
        self.detail = detail


class ParseError(SyncError):
    """Raised when a source does not contain valid JSON."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


class MalformedRecordError(SyncError):
    """Raised when a JSON record lacks the fields expected for its kind."""

    def __init__(self, reason: str, *, source: str | None = None) -> None:
        where = f" in {source}" if source else ""
        super().__init__(f"Malformed record{where}: {reason}")
        self.reason = reason
        self.source = source


class ImportCancelled(SyncError):
    """Raised when the user declines a confirmation prompt.

    Not a failure: callers report it and exit successfully.
    """
