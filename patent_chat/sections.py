from __future__ import annotations

import logging
import math

from patent_chat.headings import SECTION_HEADINGS, format_section_name, heading_pattern, next_heading
from patent_chat.models import Section
from patent_chat.text_utils import MARKER_RE, strip_markers

logger = logging.getLogger(__name__)

PARAGRAPHS_PER_PAGE = 5
MIN_SECTION_CHARS = 50
MAX_SECTION_CHARS = 10000

_HEADING_PATTERNS = tuple((name, heading_pattern(spellings)) for name, spellings in SECTION_HEADINGS)


def page_for_paragraph(number: int, num_pages: int | None = None) -> int:
    page = max(1, math.ceil(number / PARAGRAPHS_PER_PAGE))
    if num_pages and num_pages > 0:
        page = min(page, num_pages)
    return page


def estimate_page(text: str, offset: int, num_pages: int) -> int:
    preceding = None
    for match in MARKER_RE.finditer(text, 0, offset):
        preceding = match
    if preceding is not None:
        return page_for_paragraph(int(preceding.group(1)), num_pages)
    pages = max(1, num_pages)
    if not text:
        return 1
    return min(pages, int(offset / len(text) * pages) + 1)


def extract_sections(text: str, num_pages: int) -> list[Section]:
    found: list[tuple[int, Section]] = []
    for name, pattern in _HEADING_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        start = match.end()
        end = next_heading(text, start)
        body = text[start:end] if end is not None else text[start:]
        content = strip_markers(body[:MAX_SECTION_CHARS])[:MAX_SECTION_CHARS]
        if len(content) < MIN_SECTION_CHARS:
            logger.debug("Skipping short section %s (%s chars)", name, len(content))
            continue
        section = Section(
            name=format_section_name(name),
            content=content,
            page=estimate_page(text, match.start(), num_pages),
        )
        found.append((match.start(), section))

    found.sort(key=lambda item: item[0])
    return [section for _, section in found]

