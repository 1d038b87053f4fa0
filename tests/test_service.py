import pytest

from patent_chat.errors import PatentNotFoundError, QuestionValidationError
from patent_chat.service import PatentQAService, validate_request
from patent_chat.storage import PatentCorpus
from patent_chat.synthesis import ModelSelection, SynthesisResult

from helpers import make_record, para, sample_record


class RecordingSynthesizer:
    def __init__(self) -> None:
        self.selection = ModelSelection("model-a")
        self.calls: list[tuple] = []

    def answer(self, record, question, model=None):
        self.calls.append((record.patent_number, question, model))
        return SynthesisResult(answer="Answer.", citations=(), model=model or "model-a")


def _service(records=None) -> tuple[PatentQAService, RecordingSynthesizer]:
    synth = RecordingSynthesizer()
    corpus = PatentCorpus(records if records is not None else [sample_record()])
    return PatentQAService(corpus, synth, storage_mode="file-based", has_api_key=True), synth


def test_short_question_never_reaches_pipeline() -> None:
    service, synth = _service()
    with pytest.raises(QuestionValidationError):
        service.ask("EP3456789A1", "ab")
    assert synth.calls == []


def test_missing_fields_are_rejected() -> None:
    with pytest.raises(QuestionValidationError, match="required"):
        validate_request("", "What is this?")
    with pytest.raises(QuestionValidationError):
        validate_request("EP1", None)
    assert validate_request("EP1", "  why?  ") == "why?"


def test_unknown_patent() -> None:
    service, synth = _service()
    with pytest.raises(PatentNotFoundError, match="Patent EP0000000A1 not found"):
        service.ask("EP0000000A1", "What is the Si content?")
    assert synth.calls == []


def test_lookup_ignores_whitespace_and_case() -> None:
    service, synth = _service()
    payload = service.ask(" ep 3456789 a1 ", "  What is the Si content?  ", model="model-b")
    assert synth.calls == [("EP3456789A1", "What is the Si content?", "model-b")]
    assert payload["answer"] == "Answer."
    assert payload["citations"] == []
    assert payload["patentNumber"] == "EP3456789A1"
    assert payload["timestamp"]


def test_list_patents_summary() -> None:
    service, _ = _service()
    [summary] = service.list_patents()
    assert summary["id"] == "EP3456789A1"
    assert summary["sectionsCount"] == 4
    assert summary["tablesCount"] == 1
    assert summary["numPages"] == 5
    assert summary["abstract"].endswith("...")
    assert len(summary["abstract"]) <= 253


def test_get_patent_returns_full_record() -> None:
    service, _ = _service()
    data = service.get_patent("EP3456789A1")
    assert data["patent_number"] == "EP3456789A1"
    assert len(data["numbered_paragraphs"]) == 7


def test_status() -> None:
    service, _ = _service([make_record([para(1, "Some paragraph content.")])])
    assert service.status() == {
        "status": "online",
        "patents": 1,
        "hasApiKey": True,
        "currentModel": "model-a",
        "mode": "file-based",
    }
