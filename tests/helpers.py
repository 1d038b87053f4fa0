from __future__ import annotations

from pathlib import Path

from patent_chat.models import Paragraph, PatentRecord
from patent_chat.structurer import structure_document
from patent_chat.text_utils import format_marker

FIXTURE = Path(__file__).parent / "fixtures" / "sample_patent.txt"
PROCESSED_AT = "2024-01-01T00:00:00+00:00"


def sample_text() -> str:
    return FIXTURE.read_text(encoding="utf-8")


def sample_record() -> PatentRecord:
    return structure_document(sample_text(), fallback_id="sample_patent", num_pages=5, processed_at=PROCESSED_AT)


def para(number: int, content: str) -> Paragraph:
    return Paragraph(number=number, content=content, marker=format_marker(number))


def make_record(paragraphs: list[Paragraph] | None = None, **kwargs) -> PatentRecord:
    fields = {
        "patent_number": "EP1234567A1",
        "title": "Test Steel",
        "abstract": "A steel sheet with improved magnetic properties and reduced iron loss for transformer cores.",
        "numbered_paragraphs": tuple(paragraphs or ()),
        "num_pages": 10,
    }
    fields.update(kwargs)
    return PatentRecord(**fields)
