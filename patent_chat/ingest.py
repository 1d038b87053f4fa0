from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
import logging
from pathlib import Path
from typing import Iterator, Protocol

from patent_chat.config import Settings
from patent_chat.db import PostgresStore
from patent_chat.models import PatentRecord
from patent_chat.pdf_text import extract_pdf_text
from patent_chat.storage import JsonRecordStore
from patent_chat.structurer import structure_document

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    def save(self, record: PatentRecord) -> object: ...

    def load_all(self) -> list[PatentRecord]: ...


def build_store(settings: Settings) -> RecordStore:
    if settings.postgres_dsn:
        store = PostgresStore(settings.postgres_dsn)
        store.ensure_schema()
        return store
    return JsonRecordStore(settings.processed_dir)


def structure_pdf(pdf_path: Path) -> PatentRecord:
    extracted = extract_pdf_text(pdf_path)
    return structure_document(
        extracted.text,
        fallback_id=pdf_path.stem,
        num_pages=extracted.num_pages,
        original_file_name=pdf_path.name,
        file_size=extracted.file_size,
    )


def _safe_structure(pdf_path: Path) -> PatentRecord | None:
    try:
        return structure_pdf(pdf_path)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Failed to process %s (%s)", pdf_path.name, exc)
        return None


def find_pdfs(uploads_dir: Path) -> list[Path]:
    if not uploads_dir.exists():
        return []
    return sorted(p for p in uploads_dir.iterdir() if p.suffix.lower() == ".pdf")


def _structure_all(pdfs: list[Path], workers: int) -> Iterator[PatentRecord | None]:
    if workers <= 1 or len(pdfs) <= 1:
        yield from (_safe_structure(p) for p in pdfs)
        return
    with ProcessPoolExecutor(max_workers=workers) as pool:
        yield from pool.map(_safe_structure, pdfs)


def run_ingest(settings: Settings, store: RecordStore | None = None, workers: int | None = None) -> list[PatentRecord]:
    pdfs = find_pdfs(settings.uploads_dir)
    if not pdfs:
        logger.info("No PDF files found in %s", settings.uploads_dir)
        return []

    store = store or build_store(settings)
    logger.info("Processing %s PDF file(s)", len(pdfs))
    records: list[PatentRecord] = []
    for record in _structure_all(pdfs, workers if workers is not None else settings.ingest_workers):
        if record is None:
            continue
        store.save(record)
        records.append(record)
    logger.info("Saved %s of %s patents", len(records), len(pdfs))
    return records
