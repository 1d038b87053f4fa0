from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Any

from patent_chat.config import Settings
from patent_chat.errors import QuestionValidationError
from patent_chat.llm import GroqProvider
from patent_chat.models import PatentRecord
from patent_chat.storage import PatentCorpus
from patent_chat.synthesis import AnswerSynthesizer, ModelSelection
from patent_chat.text_utils import truncate

logger = logging.getLogger(__name__)

MIN_QUESTION_CHARS = 3
ABSTRACT_PREVIEW_CHARS = 250


def validate_request(patent_id: str | None, question: str | None) -> str:
    if not patent_id or not question:
        raise QuestionValidationError("Both patentId and question are required")
    cleaned = question.strip()
    if len(cleaned) < MIN_QUESTION_CHARS:
        raise QuestionValidationError(f"Question must be at least {MIN_QUESTION_CHARS} characters long")
    return cleaned


def summarize(record: PatentRecord) -> dict[str, Any]:
    return {
        "id": record.patent_number,
        "patentNumber": record.patent_number,
        "title": record.title,
        "abstract": truncate(record.abstract, ABSTRACT_PREVIEW_CHARS) + "...",
        "keywords": list(record.keywords),
        "sectionsCount": len(record.sections),
        "tablesCount": len(record.tables),
        "compositionsCount": len(record.compositions),
        "numPages": record.num_pages,
        "fileSize": record.file_size,
        "pdfAvailable": record.pdf_available,
        "processedAt": record.processed_at,
    }


class PatentQAService:
    def __init__(
        self,
        corpus: PatentCorpus,
        synthesizer: AnswerSynthesizer,
        storage_mode: str = "file-based",
        has_api_key: bool = False,
    ) -> None:
        self.corpus = corpus
        self.synthesizer = synthesizer
        self.storage_mode = storage_mode
        self.has_api_key = has_api_key

    @classmethod
    def from_settings(cls, settings: Settings, records: list[PatentRecord]) -> "PatentQAService":
        provider = GroqProvider(
            api_key=settings.groq_api_key,
            base_url=settings.groq_base_url,
            timeout=settings.request_timeout,
        )
        synthesizer = AnswerSynthesizer(
            provider=provider,
            selection=ModelSelection(settings.llm_model),
            fallback_models=settings.fallback_models,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
        )
        return cls(
            PatentCorpus(records),
            synthesizer,
            storage_mode=settings.storage_mode,
            has_api_key=bool(settings.groq_api_key),
        )

    def list_patents(self) -> list[dict[str, Any]]:
        return [summarize(r) for r in self.corpus]

    def get_patent(self, patent_id: str) -> dict[str, Any]:
        return self.corpus.get(patent_id).to_dict()

    def ask(self, patent_id: str, question: str, model: str | None = None) -> dict[str, Any]:
        cleaned = validate_request(patent_id, question)
        record = self.corpus.get(patent_id)
        logger.info("Question for %s: %r", record.patent_number, cleaned)
        result = self.synthesizer.answer(record, cleaned, model=model)
        payload = result.to_payload()
        payload["patentNumber"] = record.patent_number
        payload["timestamp"] = datetime.now(timezone.utc).isoformat()
        return payload

    def status(self) -> dict[str, Any]:
        return {
            "status": "online",
            "patents": len(self.corpus),
            "hasApiKey": self.has_api_key,
            "currentModel": self.synthesizer.selection.current(),
            "mode": self.storage_mode,
        }
