from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Sequence

from patent_chat.claims import extract_claims
from patent_chat.models import Claim, Paragraph, PatentRecord, Section, Table
from patent_chat.paragraphs import extract_numbered_paragraphs
from patent_chat.parser import extract_abstract, extract_header_info, extract_patent_number, extract_title
from patent_chat.sections import extract_sections
from patent_chat.technical import extract_compositions, extract_keywords, extract_tables, extract_technical_details

logger = logging.getLogger(__name__)


def build_searchable_content(
    title: str,
    abstract: str,
    paragraphs: Sequence[Paragraph],
    sections: Sequence[Section],
    tables: Sequence[Table],
    claims: Sequence[Claim],
) -> str:
    parts = [f"TITLE: {title}\n\n", f"ABSTRACT: {abstract}\n\n"]
    if paragraphs:
        parts.append("DETAILED DESCRIPTION:\n")
        parts.extend(f"{p.marker} {p.content}\n" for p in paragraphs)
        parts.append("\n")
    parts.extend(f"{s.name.upper()}:\n{s.content}\n\n" for s in sections)
    parts.extend(f"TABLE {t.table_number}: {t.content}\n\n" for t in tables)
    if claims:
        parts.append("CLAIMS:\n")
        parts.extend(f"Claim {c.number}: {c.text}\n" for c in claims)
    return "".join(parts)


def structure_document(
    text: str,
    fallback_id: str,
    num_pages: int,
    original_file_name: str | None = None,
    file_size: int | None = None,
    processed_at: str | None = None,
) -> PatentRecord:
    text = text or ""
    pages = max(1, num_pages or 1)

    patent_number = extract_patent_number(text, fallback_id)
    title = extract_title(text)
    abstract = extract_abstract(text)
    paragraphs = extract_numbered_paragraphs(text)
    sections = extract_sections(text, pages)
    tables = extract_tables(text)
    compositions = extract_compositions(text)
    claims = extract_claims(text)

    record = PatentRecord(
        patent_number=patent_number,
        title=title,
        abstract=abstract,
        header_info=extract_header_info(text),
        numbered_paragraphs=tuple(paragraphs),
        sections=tuple(sections),
        tables=tuple(tables),
        compositions=tuple(compositions),
        technical_details=extract_technical_details(text),
        keywords=tuple(extract_keywords(text)),
        claims=tuple(claims),
        searchable_content=build_searchable_content(title, abstract, paragraphs, sections, tables, claims),
        processed_at=processed_at or datetime.now(timezone.utc).isoformat(),
        original_file_name=original_file_name,
        num_pages=pages,
        text_length=len(text),
        file_size=file_size,
        pdf_available=original_file_name is not None,
    )

    logger.info(
        "Structured %s: %s paragraphs, %s sections, %s tables, %s compositions, %s claims",
        patent_number,
        len(paragraphs),
        len(sections),
        len(tables),
        len(compositions),
        len(claims),
    )
    if paragraphs:
        logger.info("Paragraph range %s - %s", paragraphs[0].marker, paragraphs[-1].marker)
    return record
