from __future__ import annotations

import logging
import re

from patent_chat.rules import ExtractionRule, first_match
from patent_chat.text_utils import MARKER_RE, canonical_id, collapse_whitespace, truncate

LOGGER = logging.getLogger(__name__)

DEFAULT_TITLE = "Patent Document"
DEFAULT_ABSTRACT = "Abstract not available for this patent document."
MAX_TITLE_CHARS = 300
MIN_ABSTRACT_CHARS = 100
MAX_ABSTRACT_CHARS = 4000

TITLE_DOMAIN_TERMS = (
    "STEEL",
    "SHEET",
    "METHOD",
    "PROCESS",
    "MAGNETIC",
    "ALLOY",
    "MATERIAL",
    "PRODUCTION",
    "CONTAINING",
)


def _clean_number(value: str) -> str:
    return re.sub(r"[\s,/]", "", value).upper()


PATENT_NUMBER_RULES = (
    ExtractionRule("inid_11", re.compile(r"\(11\)\s*((?:EP|US|WO|JP|CN|KR|DE)\s*(?:\d[\s,/]*){5,12}[ABCU]\d?)\b"), clean=_clean_number),
    ExtractionRule("ep", re.compile(r"\b(EP\s*(?:\d\s*){6,9}[AB]\d)\b"), clean=_clean_number),
    ExtractionRule(
        "other_jurisdiction",
        re.compile(r"\b((?:US|WO|JP|CN|KR|DE)\s*(?:\d[\s,/]*){6,12}[ABU]\d)\b"),
        clean=_clean_number,
    ),
)


def _clean_title(value: str) -> str:
    return truncate(collapse_whitespace(value), MAX_TITLE_CHARS)


TITLE_RULES = (
    ExtractionRule(
        "inid_54",
        re.compile(
            r"\(54\)\s*([A-Z][A-Z\s\-/]+(?:" + "|".join(TITLE_DOMAIN_TERMS) + r")[A-Z\s\-/]*)",
            re.IGNORECASE,
        ),
        clean=_clean_title,
    ),
    ExtractionRule("labeled", re.compile(r"Title[:\s]+([A-Z][^\n]{20,300})", re.IGNORECASE), clean=_clean_title),
)


def _clean_abstract(value: str) -> str:
    text = collapse_whitespace(value)
    text = collapse_whitespace(MARKER_RE.sub("", text))
    text = re.sub(r"^\s*Abstract[:\s]*", "", text, flags=re.IGNORECASE)
    return text


ABSTRACT_RULES = (
    ExtractionRule(
        "inid_57",
        re.compile(
            r"\(57\)\s*([A-Z][\s\S]*?)"
            r"(?=\n\s*EP\s*\d|Europäisches|European Patent|DETAILED DESCRIPTION|DESCRIPTION OF"
            r"|TECHNICAL FIELD|\[0*1\]|【0*1】|Claims|$)",
            re.IGNORECASE,
        ),
        clean=_clean_abstract,
        accept=lambda v: len(v) > MIN_ABSTRACT_CHARS,
    ),
    ExtractionRule(
        "labeled",
        re.compile(r"Abstract[:\s]*\n([\s\S]*?)(?=\n\s*\[0*1\]|【0*1】|TECHNICAL FIELD|Claims|$)", re.IGNORECASE),
        clean=_clean_abstract,
        accept=lambda v: len(v) > MIN_ABSTRACT_CHARS,
    ),
)

HEADER_FIELDS = (
    ("application_number", re.compile(r"\(21\)\s*Application number:\s*([\d.]+)", re.IGNORECASE)),
    ("filing_date", re.compile(r"\(22\)\s*Date of filing:\s*([\d.]+)", re.IGNORECASE)),
    ("publication_date", re.compile(r"\(43\)\s*Date of publication:\s*([\d.]+)", re.IGNORECASE)),
    ("priority", re.compile(r"\(30\)\s*Priority:\s*([^\n]+)", re.IGNORECASE)),
    ("applicant", re.compile(r"\(71\)\s*Applicants?:\s*([^\n]+)", re.IGNORECASE)),
    ("classification", re.compile(r"\(51\)\s*Int\.?\s*Cl[.\d]*:\s*([^\n]+)", re.IGNORECASE)),
)
INVENTOR_RE = re.compile(r"\(72\)\s*Inventors?:\s*([^\n]+)", re.IGNORECASE)


def extract_patent_number(text: str, fallback_id: str) -> str:
    found = first_match(PATENT_NUMBER_RULES, text)
    if found:
        return found[1]
    return canonical_id(fallback_id.replace("_", ""))


def extract_title(text: str) -> str:
    found = first_match(TITLE_RULES, text)
    return found[1] if found else DEFAULT_TITLE


def extract_abstract(text: str) -> str:
    found = first_match(ABSTRACT_RULES, text)
    if not found:
        LOGGER.debug("No abstract rule matched")
        return DEFAULT_ABSTRACT
    return truncate(found[1], MAX_ABSTRACT_CHARS)


def extract_header_info(text: str) -> dict[str, str]:
    info: dict[str, str] = {}
    for key, pattern in HEADER_FIELDS:
        match = pattern.search(text)
        if match:
            info[key] = match.group(1).strip()
    inventors = [m.group(1).strip() for m in INVENTOR_RE.finditer(text)]
    if inventors:
        info["inventors"] = "; ".join(inventors)
    return info
