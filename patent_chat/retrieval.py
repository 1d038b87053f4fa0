from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Sequence

from patent_chat.models import Paragraph, PatentRecord

MAX_EVIDENCE = 10
KEYWORD_WEIGHT = 2
TOPIC_BONUS = 5
MIN_KEYWORD_CHARS = 4

STOP_WORDS = frozenset(
    {
        "what", "how", "why", "when", "where", "which", "who", "is", "are", "was", "were", "the",
        "a", "an", "of", "in", "to", "for", "and", "or", "this", "that", "these", "those", "does",
        "do", "did", "with", "from", "about", "there", "their", "into", "have", "has", "can",
        "could", "would", "should", "patent", "invention", "describe", "explain", "tell",
    }
)

WORD_RE = re.compile(r"[a-z0-9][a-z0-9\-]*")


@dataclass(frozen=True)
class TopicRule:
    name: str
    question_pattern: re.Pattern[str]
    indicators: tuple[str, ...]


TOPIC_RULES = (
    TopicRule(
        "composition",
        re.compile(r"composition|component|contain|content|element|amount|percent|mass%|wt%|alloy", re.IGNORECASE),
        ("%", "mass%", "wt%", "composition", "contain"),
    ),
    TopicRule(
        "process",
        re.compile(r"process|method|manufactur|produc|temperature|rolling|anneal|heat|step", re.IGNORECASE),
        ("°c", "℃", "rolling", "annealing", "temperature", "heating", "process"),
    ),
    TopicRule(
        "property",
        re.compile(r"propert|resistiv|magnetic|strength|loss|flux|hardness|characteristic|performance", re.IGNORECASE),
        ("resistivity", "magnetic", "iron loss", "flux density", "strength", "hardness", "w/kg"),
    ),
)


@dataclass(frozen=True)
class ScoredParagraph:
    paragraph: Paragraph
    score: int


def extract_question_keywords(question: str) -> list[str]:
    words = WORD_RE.findall(question.lower())
    return [w for w in words if len(w) >= MIN_KEYWORD_CHARS and w not in STOP_WORDS]


def score_paragraph(paragraph: Paragraph, keywords: list[str], topics: list[TopicRule]) -> int:
    content = paragraph.content.lower()
    score = KEYWORD_WEIGHT * sum(content.count(k) for k in keywords)
    for topic in topics:
        if any(ind in content for ind in topic.indicators):
            score += TOPIC_BONUS
    return score


def rank_paragraphs(record: PatentRecord, question: str, limit: int = MAX_EVIDENCE) -> list[ScoredParagraph]:
    if not record.numbered_paragraphs:
        return []
    keywords = extract_question_keywords(question)
    topics = [t for t in TOPIC_RULES if t.question_pattern.search(question)]
    scored = [ScoredParagraph(p, score_paragraph(p, keywords, topics)) for p in record.numbered_paragraphs]
    scored = [s for s in scored if s.score > 0]
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored[:limit]


def in_document_order(ranked: Sequence[ScoredParagraph]) -> list[Paragraph]:
    return sorted((s.paragraph for s in ranked), key=lambda p: p.number)


def retrieve_evidence(record: PatentRecord, question: str, limit: int = MAX_EVIDENCE) -> list[Paragraph]:
    return in_document_order(rank_paragraphs(record, question, limit))
