import json

import pytest

from eddnindex.installations import (
    generate_installations_dump,
    installation_projection,
    installation_query,
    select_unique_signals,
)


def _doc(system, timestamp, marker, with_id=True):
    doc = {
        "message": {
            "StarSystem": system,
            "SystemAddress": 42,
            "StarPos": [1.0, 2.0, 3.0],
            "signals": [
                {"SignalType": "Installation", "timestamp": timestamp, "SignalName": marker}
            ],
        }
    }
    if with_id:
        doc["_id"] = "some-id"
    return doc


def _marker(doc):
    return doc["message"]["signals"][0]["SignalName"]


class FakeCollection:
    def __init__(self, documents):
        self.documents = documents
        self.calls = []

    def find(self, query, projection):
        self.calls.append((query, projection))
        return iter(self.documents)


def test_query_selects_installations():
    assert installation_query() == {"message.signals.SignalType": "Installation"}


def test_projection_filters_signals_by_type():
    projection = installation_projection()
    assert projection["message.StarSystem"] == 1
    cond = projection["message.signals"]["$filter"]["cond"]
    assert cond == {"$eq": ["$$signal.SignalType", "Installation"]}


def test_newer_document_replaces_stored_one():
    docs = [
        _doc("Sol", "2024-01-01T00:00:00Z", "old"),
        _doc("Sol", "2024-01-05T00:00:00Z", "new"),
    ]
    result = select_unique_signals(docs)
    assert list(result) == ["Sol"]
    assert _marker(result["Sol"]) == "new"


def test_older_document_is_ignored():
    docs = [
        _doc("Sol", "2024-01-05T00:00:00Z", "new"),
        _doc("Sol", "2024-01-01T00:00:00Z", "old"),
    ]
    assert _marker(select_unique_signals(docs)["Sol"]) == "new"


def test_same_day_later_time_does_not_replace():
    docs = [
        _doc("Sol", "2024-01-01T01:00:00Z", "first"),
        _doc("Sol", "2024-01-01T23:00:00Z", "second"),
    ]
    assert _marker(select_unique_signals(docs)["Sol"]) == "first"


def test_ids_are_removed_and_input_untouched():
    original = _doc("Sol", "2024-01-01T00:00:00Z", "x")
    result = select_unique_signals([original])
    assert "_id" not in result["Sol"]
    assert "_id" in original


def test_result_sorted_by_system():
    docs = [
        _doc("Zeta", "2024-01-01T00:00:00Z", "z"),
        _doc("Alpha", "2024-01-01T00:00:00Z", "a"),
        _doc("Mid", "2024-01-01T00:00:00Z", "m"),
    ]
    assert list(select_unique_signals(docs)) == ["Alpha", "Mid", "Zeta"]


def test_bad_timestamp_raises():
    docs = [
        _doc("Sol", "2024-01-01T00:00:00Z", "a"),
        _doc("Sol", "yesterday", "b"),
    ]
    with pytest.raises(ValueError):
        select_unique_signals(docs)


def test_dump_writes_json_and_uses_query(tmp_path):
    docs = [
        _doc("Sol", "2024-01-01T00:00:00Z", "old"),
        _doc("Achenar", "2024-02-01T00:00:00Z", "a"),
        _doc("Sol", "2024-03-01T00:00:00Z", "new"),
    ]
    collection = FakeCollection(docs)
    output = tmp_path / "installations.json"

    result = generate_installations_dump(collection, output)

    assert collection.calls == [(installation_query(), installation_projection())]
    assert json.loads(output.read_text(encoding="utf-8")) == result
    assert sorted(result) == ["Achenar", "Sol"]
    assert _marker(result["Sol"]) == "new"