from __future__ import annotations

import json
from typing import TYPE_CHECKING

import httpx
import pytest

from fedisync.adapters.shared_lists import SharedListFetcher
from fedisync.domain.errors import MalformedRecordError, RemoteRejected
from fedisync.domain.records import RecordKind
from tests.helpers.http import make_client_factory

if TYPE_CHECKING:
    from pathlib import Path

LIST_URL = "https://lists.example/shared/tags.json"


def test_fetches_array_without_credentials_and_saves_copy(tmp_path: Path) -> None:
    seen: list[httpx.Request] = []
    payload = [{"name": "python"}, {"name": "rust"}]

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=payload)

    fetcher = SharedListFetcher(
        client_factory=make_client_factory(handler),
        download_dir=tmp_path / "downloads",
    )

    records = fetcher(RecordKind.TAG, LIST_URL)

    assert [item.record for item in records] == payload
    assert {item.source for item in records} == {LIST_URL}
    assert "Authorization" not in seen[0].headers
    saved = list((tmp_path / "downloads").iterdir())
    assert len(saved) == 1
    assert saved[0].name.endswith("-shared-tags.json")
    assert json.loads(saved[0].read_text(encoding="utf-8")) == payload


def test_single_object_document_is_one_record() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"title": "Spoilers", "keywords": [{"keyword": "x"}]})

    fetcher = SharedListFetcher(client_factory=make_client_factory(handler))

    records = fetcher(RecordKind.FILTER, "https://lists.example/spoilers")

    assert len(records) == 1
    assert records[0].record["title"] == "Spoilers"


def test_single_malformed_object_is_rejected() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"title": "No keywords"})

    fetcher = SharedListFetcher(client_factory=make_client_factory(handler))

    with pytest.raises(MalformedRecordError, match="keywords"):
        fetcher(RecordKind.FILTER, "https://lists.example/broken")


def test_missing_list_raises_remote_rejected(tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="Not Found")

    fetcher = SharedListFetcher(
        client_factory=make_client_factory(handler),
        download_dir=tmp_path,
    )

    with pytest.raises(RemoteRejected) as excinfo:
        fetcher(RecordKind.TAG, LIST_URL)

    assert excinfo.value.status == 404
    assert excinfo.value.url == LIST_URL
    assert list(tmp_path.iterdir()) == []
