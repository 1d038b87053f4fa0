from __future__ import annotations

from contextlib import contextmanager
import json
import logging
from typing import Iterable

import psycopg

from patent_chat.models import PatentRecord

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS patent_records (
    patent_number TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    processed_at TEXT NOT NULL,
    record JSONB NOT NULL
)
"""


class PostgresStore:
    def __init__(self, dsn: str) -> None:
        self.dsn = dsn

    @contextmanager
    def connection(self):
        with psycopg.connect(self.dsn) as conn:
            yield conn

    def ensure_schema(self) -> None:
        with self.connection() as conn, conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
            conn.commit()

    def save(self, record: PatentRecord) -> None:
        self.upsert_records([record])

    def upsert_records(self, records: Iterable[PatentRecord]) -> None:
        with self.connection() as conn, conn.cursor() as cur:
            for record in records:
                cur.execute(
                    """
                    INSERT INTO patent_records(patent_number, title, processed_at, record)
                    VALUES (%s, %s, %s, %s::jsonb)
                    ON CONFLICT (patent_number)
                    DO UPDATE SET title = EXCLUDED.title,
                                  processed_at = EXCLUDED.processed_at,
                                  record = EXCLUDED.record
                    """,
                    (
                        record.patent_number,
                        record.title,
                        record.processed_at,
                        json.dumps(record.to_dict(), ensure_ascii=False),
                    ),
                )
            conn.commit()

    def load_all(self) -> list[PatentRecord]:
        with self.connection() as conn, conn.cursor() as cur:
            cur.execute("SELECT record FROM patent_records ORDER BY processed_at, patent_number")
            rows = cur.fetchall()
        records = []
        for (payload,) in rows:
            data = json.loads(payload) if isinstance(payload, str) else payload
            records.append(PatentRecord.from_dict(data))
        logger.info("Loaded %s patent records from Postgres", len(records))
        return records
