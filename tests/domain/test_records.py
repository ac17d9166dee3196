from __future__ import annotations

import logging

import pytest

from fedisync.domain.errors import MalformedRecordError
from fedisync.domain.records import RecordKind, RecordSet, natural_key


def test_record_kind_key_fields() -> None:
    assert RecordKind.FILTER.key_field == "title"
    assert RecordKind.TAG.key_field == "name"
    assert RecordKind("filters") is RecordKind.FILTER
    assert RecordKind.TAG.label == "tag"


def test_natural_key_reads_variant_field() -> None:
    assert natural_key({"title": "Spoilers", "keywords": []}, RecordKind.FILTER) == "Spoilers"
    assert natural_key({"name": "python"}, RecordKind.TAG) == "python"


@pytest.mark.parametrize("record", [{}, {"name": ""}, {"name": 42}, {"title": "wrong field"}])
def test_natural_key_rejects_missing_name(record: dict[str, object]) -> None:
    with pytest.raises(MalformedRecordError, match="tag without a string 'name'") as excinfo:
        natural_key(record, RecordKind.TAG, source="broken.json")

    assert excinfo.value.source == "broken.json"
    assert "broken.json" in str(excinfo.value)


def test_record_set_last_write_wins_and_logs(caplog: pytest.LogCaptureFixture) -> None:
    records = RecordSet(RecordKind.TAG)
    first = {"name": "python", "url": "a"}
    second = {"name": "python", "url": "b"}

    assert records.add(first, source="a.json") is None
    with caplog.at_level(logging.WARNING):
        previous = records.add(second, source="b.json")

    assert previous is first
    assert len(records) == 1
    assert records.get("python") is second
    assert "Duplicate tag 'python' in b.json" in caplog.text


def test_record_set_sorted_records_orders_by_name() -> None:
    records = RecordSet.from_records(
        RecordKind.TAG, [{"name": "zig"}, {"name": "ada"}, {"name": "lua"}]
    )

    assert [record["name"] for record in records.sorted_records()] == ["ada", "lua", "zig"]
    assert records.keys() == {"ada", "lua", "zig"}
    assert "ada" in records
    assert "cobol" not in records


def test_empty_record_set_is_falsy() -> None:
    assert not RecordSet(RecordKind.FILTER)
