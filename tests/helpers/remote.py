"""Reusable fakes for the remote, confirmation and display ports."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from fedisync.domain.errors import RemoteRejected
from fedisync.domain.ports import Confirm, Display, RecordRemote
from fedisync.domain.records import RecordKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from fedisync.domain.records import Record


class FakeRemote(RecordRemote):
    """In-memory implementation of the remote port for testing."""

    def __init__(
        self,
        *,
        filters: Iterable[Record] = (),
        tags: Iterable[Record] = (),
        reject_tags: Iterable[str] = (),
        reject_status: int = 422,
    ) -> None:
        self._stored: dict[RecordKind, list[Record]] = {
            RecordKind.FILTER: [copy.deepcopy(record) for record in filters],
            RecordKind.TAG: [copy.deepcopy(record) for record in tags],
        }
        self._reject_tags = set(reject_tags)
        self._reject_status = reject_status
        self.fetch_calls: list[RecordKind] = []
        self.filter_batches: list[list[Record]] = []
        self.followed: list[Record] = []

    @property
    def upload_calls(self) -> int:
        return len(self.filter_batches) + len(self.followed)

    def fetch_records(self, kind: RecordKind) -> list[Record]:
        self.fetch_calls.append(kind)
        return copy.deepcopy(self._stored[kind])

    def create_filters(self, filters: Sequence[Record]) -> None:
        self.filter_batches.append(list(filters))

    def follow_tag(self, tag: Record) -> None:
        if tag.get("name") in self._reject_tags:
            raise RemoteRejected(self._reject_status, url="/api/v1/tag_following")
        self.followed.append(tag)


class ScriptedConfirm(Confirm):
    """Answers prompts from a fixed script and records every prompt shown."""

    def __init__(self, *answers: bool) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        if not self._answers:
            raise AssertionError(f"Unexpected prompt: {prompt}")
        return self._answers.pop(0)


class RecordingDisplay(Display):
    def __init__(self) -> None:
        self.lines: list[str] = []

    def __call__(self, text: str) -> None:
        self.lines.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)
