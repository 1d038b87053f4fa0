from __future__ import annotations

import re
import unicodedata


WS_RE = re.compile(r"\s+")
HSPACE_RE = re.compile(r"[ \t\f\v\xa0]+")
HYPHEN_WRAP_RE = re.compile(r"(\w)-[ \t]*\n[ \t]*([a-z])")
MARKER_RE = re.compile(r"[\[【]\s*0*(\d+)\s*[\]】]")


def normalize_page_text(text: str) -> str:
    """NFKC-normalize extracted page text, keeping line structure for heading detection."""
    text = unicodedata.normalize("NFKC", text or "")
    text = text.replace("\x00", " ")
    text = HYPHEN_WRAP_RE.sub(r"\1\2", text)
    lines = (HSPACE_RE.sub(" ", line).strip() for line in text.splitlines())
    return "\n".join(lines)


def collapse_whitespace(text: str) -> str:
    return WS_RE.sub(" ", text or "").strip()


def format_marker(number: int) -> str:
    return f"[{number:04d}]"


def strip_markers(text: str) -> str:
    return collapse_whitespace(MARKER_RE.sub(" ", text))


def truncate(text: str, limit: int, suffix: str = "") -> str:
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + suffix


def canonical_id(value: str) -> str:
    return re.sub(r"\s+", "", value or "").upper()
