from __future__ import annotations

import logging
import re

from patent_chat.headings import cut_at_heading
from patent_chat.models import Paragraph
from patent_chat.text_utils import collapse_whitespace, format_marker

logger = logging.getLogger(__name__)

MIN_CONTENT_CHARS = 15
MAX_PARAGRAPH_NUMBER = 10000

# Marker conventions, tried in order; matches from all of them are merged.
PARAGRAPH_PATTERNS = (
    re.compile(r"\[(\d{4})\]\s*(.+?)(?=\s*(?:\[\d{4}\]|【\d{4}】)|\s*\Z)", re.DOTALL),
    re.compile(r"\[0*(\d+)\]\s*(.+?)(?=\s*(?:\[0*\d+\]|【\d{4}】)|\s*\Z)", re.DOTALL),
    re.compile(r"【(\d{4})】\s*(.+?)(?=\s*(?:【\d{4}】|\[\d{4}\])|\s*\Z)", re.DOTALL),
)


def _candidates(text: str) -> list[Paragraph]:
    found: list[Paragraph] = []
    for pattern in PARAGRAPH_PATTERNS:
        for match in pattern.finditer(text):
            number = int(match.group(1))
            content = collapse_whitespace(cut_at_heading(match.group(2)))
            if len(content) <= MIN_CONTENT_CHARS or not 0 < number < MAX_PARAGRAPH_NUMBER:
                continue
            found.append(Paragraph(number=number, content=content, marker=format_marker(number)))
    return found


def find_gaps(paragraphs: list[Paragraph] | tuple[Paragraph, ...]) -> list[tuple[int, int]]:
    gaps: list[tuple[int, int]] = []
    for prev, cur in zip(paragraphs, paragraphs[1:]):
        if cur.number - prev.number > 1:
            gaps.append((prev.number, cur.number))
    return gaps


def extract_numbered_paragraphs(text: str) -> list[Paragraph]:
    best: dict[int, Paragraph] = {}
    for para in _candidates(text):
        current = best.get(para.number)
        if current is None or len(para.content) > len(current.content):
            best[para.number] = para

    paragraphs = [best[n] for n in sorted(best)]
    logger.debug("Found %s numbered paragraphs", len(paragraphs))

    gaps = find_gaps(paragraphs)
    if 0 < len(gaps) < 10:
        logger.info("Paragraph numbering gaps: %s", ", ".join(f"{a}->{b}" for a, b in gaps))
    return paragraphs
