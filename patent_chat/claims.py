from __future__ import annotations

import re

from patent_chat.models import Claim
from patent_chat.text_utils import collapse_whitespace, truncate

MAX_CLAIM_CHARS = 2000

CLAIMS_START_RE = re.compile(
    r"^[ \t]*(?:Claims|CLAIMS|What is claimed is:?|We claim:?)[ \t]*$",
    re.MULTILINE,
)
CLAIMS_END_RE = re.compile(r"^[ \t]*(?:Description|Drawings|Figures|DESCRIPTION|DRAWINGS|FIGURES)\b", re.MULTILINE)
CLAIM_RE = re.compile(r"^[ \t]*(\d{1,3})\.\s*(.+?)(?=^[ \t]*\d{1,3}\.\s|\Z)", re.MULTILINE | re.DOTALL)
DEP_RE = re.compile(r"\bclaims?\s+(\d+)(?:\s*(to|-|–|or|and)\s*(\d+))?", re.IGNORECASE)


def parse_claim_dependency(text: str) -> tuple[bool, tuple[int, ...]]:
    refs: list[int] = []
    for match in DEP_RE.finditer(text):
        first = int(match.group(1))
        if match.group(3) and match.group(2) in {"to", "-", "–"}:
            numbers = range(first, int(match.group(3)) + 1)
        elif match.group(3):
            numbers = (first, int(match.group(3)))
        else:
            numbers = (first,)
        for n in numbers:
            if n not in refs:
                refs.append(n)
    return bool(refs), tuple(refs)


def _claims_block(text: str) -> str | None:
    for start in CLAIMS_START_RE.finditer(text):
        rest = text[start.end() :]
        end = CLAIMS_END_RE.search(rest)
        block = rest[: end.start()] if end else rest
        if CLAIM_RE.search(block):
            return block
    return None


def extract_claims(text: str) -> list[Claim]:
    block = _claims_block(text)
    if block is None:
        return []
    claims: list[Claim] = []
    seen: set[int] = set()
    for match in CLAIM_RE.finditer(block):
        number = int(match.group(1))
        if number in seen:
            continue
        seen.add(number)
        body = truncate(collapse_whitespace(match.group(2)), MAX_CLAIM_CHARS)
        _, depends_on = parse_claim_dependency(body)
        depends_on = tuple(n for n in depends_on if n < number)
        claims.append(Claim(number=number, text=body, is_dependent=bool(depends_on), depends_on=depends_on))
    return claims
