from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

DEFAULT_MODELS = "llama-3.3-70b-versatile,llama-3.1-8b-instant,mixtral-8x7b-32768,gemma2-9b-it"


def _split_models(raw: str) -> tuple[str, ...]:
    return tuple(m.strip() for m in raw.split(",") if m.strip())


@dataclass(frozen=True)
class Settings:
    data_root: Path = Path(os.getenv("PATENT_CHAT_DATA_ROOT", "data"))
    postgres_dsn: str | None = os.getenv("POSTGRES_DSN") or None
    groq_api_key: str | None = os.getenv("GROQ_API_KEY") or None
    groq_base_url: str = os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1")
    llm_model: str = os.getenv("LLM_MODEL", "llama-3.3-70b-versatile")
    fallback_models: tuple[str, ...] = _split_models(os.getenv("LLM_FALLBACK_MODELS", DEFAULT_MODELS))
    temperature: float = float(os.getenv("LLM_TEMPERATURE", "0.2"))
    max_tokens: int = int(os.getenv("LLM_MAX_TOKENS", "400"))
    request_timeout: float = float(os.getenv("LLM_TIMEOUT", "30"))
    ingest_workers: int = int(os.getenv("INGEST_WORKERS", "1"))

    @property
    def uploads_dir(self) -> Path:
        return self.data_root / "uploads"

    @property
    def processed_dir(self) -> Path:
        return self.data_root / "processed"

    @property
    def storage_mode(self) -> str:
        return "postgres" if self.postgres_dsn else "file-based"
