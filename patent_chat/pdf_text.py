from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from pypdf import PdfReader

from patent_chat.text_utils import normalize_page_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractedText:
    text: str
    num_pages: int
    file_size: int


def extract_pdf_text(pdf_path: Path) -> ExtractedText:
    pdf_path = Path(pdf_path)
    reader = PdfReader(str(pdf_path))
    pages: list[str] = []
    for i, page in enumerate(reader.pages):
        try:
            pages.append(normalize_page_text(page.extract_text() or ""))
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to extract page %s of %s: %s", i + 1, pdf_path.name, exc)
            pages.append("")
    text = "\n".join(pages)
    logger.info("Extracted %s pages (%s chars) from %s", len(pages), len(text), pdf_path.name)
    return ExtractedText(text=text, num_pages=len(pages), file_size=pdf_path.stat().st_size)
