import json

import pytest

from patent_chat.errors import PatentNotFoundError
from patent_chat.storage import JsonRecordStore, PatentCorpus

from helpers import make_record, sample_record


def test_json_store_roundtrip(tmp_path) -> None:
    store = JsonRecordStore(tmp_path / "processed")
    record = sample_record()
    path = store.save(record)

    assert path.name == "EP3456789A1.json"
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["patent_number"] == "EP3456789A1"
    assert data["technical_details"]["temperatures"][0]["raw"] == "1050-1150°C"
    assert store.load_all() == [record]


def test_missing_directory_loads_nothing(tmp_path) -> None:
    assert JsonRecordStore(tmp_path / "absent").load_all() == []


def test_corpus_collision_keeps_last_record() -> None:
    first = make_record([], title="First")
    second = make_record([], patent_number="ep 1234567 a1", title="Second")
    corpus = PatentCorpus([first, second])
    assert len(corpus) == 1
    assert corpus.get("EP1234567A1").title == "Second"


def test_corpus_unknown_id() -> None:
    with pytest.raises(PatentNotFoundError):
        PatentCorpus([]).get("EP1")
