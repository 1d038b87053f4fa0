from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator

from patent_chat.errors import PatentNotFoundError
from patent_chat.models import PatentRecord
from patent_chat.text_utils import canonical_id

LOGGER = logging.getLogger(__name__)


class JsonRecordStore:
    def __init__(self, processed_dir: Path) -> None:
        self.processed_dir = Path(processed_dir)

    def path_for(self, patent_number: str) -> Path:
        return self.processed_dir / f"{canonical_id(patent_number)}.json"

    def save(self, record: PatentRecord) -> Path:
        self.processed_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(record.patent_number)
        path.write_text(json.dumps(record.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
        return path

    def load_all(self) -> list[PatentRecord]:
        if not self.processed_dir.exists():
            return []
        records: list[PatentRecord] = []
        for path in sorted(self.processed_dir.glob("*.json")):
            records.append(PatentRecord.from_dict(json.loads(path.read_text(encoding="utf-8"))))
        LOGGER.info("Loaded %s patent records from %s", len(records), self.processed_dir)
        return records


class PatentCorpus:
    """Read-only, in-memory set of records keyed by canonical patent number."""

    def __init__(self, records: Iterable[PatentRecord]) -> None:
        by_id: dict[str, PatentRecord] = {}
        for record in records:
            key = canonical_id(record.patent_number)
            if key in by_id:
                LOGGER.warning("Duplicate patent number %s, keeping the last loaded record", key)
            by_id[key] = record
        self._records = MappingProxyType(by_id)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PatentRecord]:
        return iter(self._records.values())

    def get(self, patent_id: str) -> PatentRecord:
        record = self._records.get(canonical_id(patent_id))
        if record is None:
            raise PatentNotFoundError(patent_id)
        return record
