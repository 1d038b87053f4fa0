from __future__ import annotations

from typing import Sequence

from patent_chat.models import Citation, Paragraph, PatentRecord
from patent_chat.sections import page_for_paragraph
from patent_chat.text_utils import MARKER_RE

MAX_CITATIONS = 5
SECONDARY_CITATIONS = 3


def paragraph_citation(record: PatentRecord, paragraph: Paragraph) -> Citation:
    return Citation(
        patent_id=record.patent_number,
        page=page_for_paragraph(paragraph.number, record.num_pages),
        section=f"Paragraph {paragraph.marker}",
        paragraph_number=paragraph.number,
        type="paragraph",
    )


def abstract_citation(record: PatentRecord) -> Citation:
    return Citation(patent_id=record.patent_number, page=1, section="Abstract", type="abstract")


def cited_paragraph_numbers(answer: str) -> list[int]:
    numbers: list[int] = []
    for match in MARKER_RE.finditer(answer or ""):
        number = int(match.group(1))
        if number not in numbers:
            numbers.append(number)
    return numbers


def _finalize(citations: list[Citation], limit: int) -> list[Citation]:
    unique: list[Citation] = []
    seen: set[tuple[int, str]] = set()
    for citation in citations:
        key = (citation.page, citation.section)
        if key in seen:
            continue
        seen.add(key)
        unique.append(citation)
    unique.sort(key=lambda c: (c.paragraph_number is None, c.paragraph_number or 0))
    return unique[:limit]


def citations_from_paragraphs(
    record: PatentRecord, paragraphs: Sequence[Paragraph], limit: int = MAX_CITATIONS
) -> list[Citation]:
    return _finalize([paragraph_citation(record, p) for p in paragraphs], limit)


def extract_citations(
    answer: str,
    evidence: Sequence[Paragraph],
    record: PatentRecord,
    limit: int = MAX_CITATIONS,
) -> list[Citation]:
    """Resolve markers in ``answer``; else cite top ``evidence``; else the abstract.

    ``evidence`` is expected in rank order, best first.
    """
    citations = []
    for number in cited_paragraph_numbers(answer):
        paragraph = record.paragraph(number)
        if paragraph is not None:
            citations.append(paragraph_citation(record, paragraph))
    if not citations:
        citations = [paragraph_citation(record, p) for p in evidence[:SECONDARY_CITATIONS]]
    if not citations:
        citations = [abstract_citation(record)]
    return _finalize(citations, limit)
