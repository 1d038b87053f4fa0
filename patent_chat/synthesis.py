from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
from typing import Any, Sequence

from patent_chat.citations import abstract_citation, citations_from_paragraphs, extract_citations
from patent_chat.errors import (
    AuthenticationError,
    ConfigurationError,
    GenerationError,
    ModelUnavailableError,
    TransientGenerationError,
)
from patent_chat.llm import GenerationProvider
from patent_chat.models import Citation, Paragraph, PatentRecord
from patent_chat.prompts import build_messages, build_prompt
from patent_chat.retrieval import in_document_order, rank_paragraphs
from patent_chat.text_utils import truncate

logger = logging.getLogger(__name__)

FALLBACK_EXCERPT_CHARS = 300
SECOND_EXCERPT_CHARS = 200
ABSTRACT_ANSWER_CHARS = 600


class ModelSelection:
    """Current default model, shared across requests."""

    def __init__(self, model: str) -> None:
        self._model = model
        self._lock = threading.Lock()

    def current(self) -> str:
        with self._lock:
            return self._model

    def compare_and_set(self, expected: str, new: str) -> bool:
        with self._lock:
            if self._model != expected:
                return False
            self._model = new
            return True


@dataclass(frozen=True)
class SynthesisResult:
    answer: str
    citations: tuple[Citation, ...]
    model: str | None = None

    @property
    def used_local_fallback(self) -> bool:
        return self.model is None

    def to_payload(self) -> dict[str, Any]:
        return {"answer": self.answer, "citations": [c.to_dict() for c in self.citations]}


def local_fallback(record: PatentRecord, ranked: Sequence[Paragraph]) -> SynthesisResult:
    if not ranked:
        answer = truncate(record.abstract, ABSTRACT_ANSWER_CHARS, "...")
        return SynthesisResult(answer=answer, citations=(abstract_citation(record),))

    top = ranked[0]
    answer = f"According to {top.marker}, {truncate(top.content, FALLBACK_EXCERPT_CHARS, '...')}"
    used = [top]
    if len(ranked) > 1:
        second = ranked[1]
        answer += f" See also {second.marker}: {truncate(second.content, SECOND_EXCERPT_CHARS, '...')}"
        used.append(second)
    return SynthesisResult(answer=answer, citations=tuple(citations_from_paragraphs(record, used)))


class AnswerSynthesizer:
    def __init__(
        self,
        provider: GenerationProvider,
        selection: ModelSelection,
        fallback_models: Sequence[str] = (),
        temperature: float = 0.2,
        max_tokens: int = 400,
    ) -> None:
        self.provider = provider
        self.selection = selection
        self.fallback_models = tuple(fallback_models)
        self.temperature = temperature
        self.max_tokens = max_tokens

    def _generate(self, messages: list[dict[str, str]], model: str) -> str:
        text = self.provider.generate(
            messages=messages,
            model=model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        ).strip()
        if not text:
            raise TransientGenerationError(f"Empty completion from {model}", model=model)
        return text

    def _result(
        self, record: PatentRecord, text: str, ranked: Sequence[Paragraph], model: str
    ) -> SynthesisResult:
        citations = extract_citations(text, ranked, record)
        return SynthesisResult(answer=text, citations=tuple(citations), model=model)

    def answer(self, record: PatentRecord, question: str, model: str | None = None) -> SynthesisResult:
        scored = rank_paragraphs(record, question)
        ranked = [s.paragraph for s in scored]
        evidence = in_document_order(scored)
        messages = build_messages(build_prompt(record, question, evidence))
        primary = model or self.selection.current()

        try:
            text = self._generate(messages, primary)
            return self._result(record, text, ranked, primary)
        except AuthenticationError as exc:
            raise ConfigurationError(f"Generation provider rejected credentials: {exc}") from exc
        except ModelUnavailableError as exc:
            logger.warning("Model %s unavailable (%s), trying fallback models", primary, exc)
            return self._answer_with_fallback_models(record, messages, ranked, primary)
        except GenerationError as exc:
            logger.warning("Generation with %s failed (%s), using local fallback", primary, exc)
            return local_fallback(record, ranked)

    def _answer_with_fallback_models(
        self,
        record: PatentRecord,
        messages: list[dict[str, str]],
        ranked: Sequence[Paragraph],
        failed: str,
    ) -> SynthesisResult:
        for candidate in self.fallback_models:
            if candidate == failed:
                continue
            logger.info("Trying model %s", candidate)
            try:
                text = self._generate(messages, candidate)
            except AuthenticationError as exc:
                raise ConfigurationError(f"Generation provider rejected credentials: {exc}") from exc
            except GenerationError as exc:
                logger.warning("Model %s failed: %s", candidate, exc)
                continue
            if self.selection.compare_and_set(failed, candidate):
                logger.info("Switched default model %s -> %s", failed, candidate)
            return self._result(record, text, ranked, candidate)

        logger.warning("All fallback models failed, using local fallback")
        return local_fallback(record, ranked)
