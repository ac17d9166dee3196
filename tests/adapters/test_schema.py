from __future__ import annotations

import logging

import pytest

from fedisync.adapters.mastodon import FilterPayload, TagPayload, parse_records, validate_record
from fedisync.domain.errors import MalformedRecordError, ParseError
from fedisync.domain.records import RecordKind


def test_validate_record_returns_original_mapping(filter_payload: dict[str, object]) -> None:
    validated = FilterPayload.model_validate(filter_payload)

    record = validate_record(RecordKind.FILTER, filter_payload, source="remote")

    assert record is filter_payload
    assert validated.title == "Spoilers"
    assert validated.keywords[1].keyword == "season 3"


def test_tag_payload_keeps_unknown_fields(tag_payload: dict[str, object]) -> None:
    validated = TagPayload.model_validate({**tag_payload, "featuring": False})

    assert validated.name == "opensource"
    assert validated.model_extra == {"featuring": False}


def test_validate_record_reports_field_location() -> None:
    with pytest.raises(MalformedRecordError) as excinfo:
        validate_record(RecordKind.FILTER, {"title": "Spoilers"}, source="f.json")

    assert excinfo.value.source == "f.json"
    assert excinfo.value.reason.startswith("keywords: ")


def test_validate_record_rejects_non_objects() -> None:
    with pytest.raises(MalformedRecordError, match="expected a JSON object, got list"):
        validate_record(RecordKind.TAG, ["python"], source="t.json")


def test_parse_records_skips_malformed_list_entries(caplog: pytest.LogCaptureFixture) -> None:
    payload = [{"name": "python"}, {"name": 5}, "rust", {"name": "zig"}]

    with caplog.at_level(logging.WARNING):
        records = parse_records(RecordKind.TAG, payload, source="list.json")

    assert records == [{"name": "python"}, {"name": "zig"}]
    assert "list.json[1]" in caplog.text
    assert "list.json[2]" in caplog.text


def test_parse_records_requires_array_when_single_disallowed() -> None:
    with pytest.raises(ParseError, match="Expected a JSON array of tags"):
        parse_records(RecordKind.TAG, {"name": "python"}, source="remote", allow_single=False)


def test_parse_records_rejects_scalars() -> None:
    with pytest.raises(ParseError, match="JSON object or array"):
        parse_records(RecordKind.FILTER, "nope", source="remote")


def test_tag_history_shape_does_not_reject_tag() -> None:
    payload = {"name": "python", "history": [{"day": 1668211200}, {"uses": "3", "extra": True}]}

    records = parse_records(RecordKind.TAG, [payload], source="remote", allow_single=False)

    assert records == [payload]
