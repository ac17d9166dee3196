from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from fedisync.config.instance import InstanceConfig, SyncPaths

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _clear_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FEDISYNC_INSTANCE_URL", raising=False)
    monkeypatch.delenv("FEDISYNC_ACCESS_TOKEN", raising=False)


@pytest.fixture
def filter_payload() -> dict[str, object]:
    return {
        "id": "19972",
        "title": "Spoilers",
        "context": ["home", "public"],
        "expires_at": None,
        "filter_action": "warn",
        "keywords": [
            {"id": "1197", "keyword": "finale", "whole_word": True},
            {"id": "1198", "keyword": "season 3", "whole_word": False},
        ],
        "statuses": [],
    }


@pytest.fixture
def tag_payload() -> dict[str, object]:
    return {
        "name": "opensource",
        "url": "https://mastodon.example/tags/opensource",
        "history": [
            {"day": "1668211200", "accounts": "12", "uses": "30"},
            {"day": "1668124800", "accounts": "9", "uses": "14"},
        ],
        "following": True,
    }


@pytest.fixture
def instance_config(tmp_path: Path) -> InstanceConfig:
    return InstanceConfig(
        instance_url="https://mastodon.example",
        access_token="secret-token",  # noqa: S106
        filters=SyncPaths(
            export_dir=tmp_path / "export" / "filters",
            import_dir=tmp_path / "import" / "filters",
            download_dir=tmp_path / "downloads" / "filters",
        ),
        tags=SyncPaths(
            export_dir=tmp_path / "export" / "tags",
            import_dir=tmp_path / "import" / "tags",
            download_dir=tmp_path / "downloads" / "tags",
        ),
    )
