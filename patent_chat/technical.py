from __future__ import annotations

import re

from patent_chat.models import Composition, ProcessMention, Table, TechnicalDetails, Temperature
from patent_chat.text_utils import collapse_whitespace, truncate

MAX_TABLES = 30
MAX_COMPOSITIONS = 50
MAX_TEMPERATURES = 50
PROCESS_DESCRIPTION_CHARS = 200

ELEMENTS = frozenset(
    """
    H He Li Be B C N O F Ne Na Mg Al Si P S Cl Ar K Ca Sc Ti V Cr Mn Fe Co Ni Cu Zn Ga Ge As Se
    Br Kr Rb Sr Y Zr Nb Mo Tc Ru Rh Pd Ag Cd In Sn Sb Te I Xe Cs Ba La Ce Pr Nd Pm Sm Eu Gd Tb Dy
    Ho Er Tm Yb Lu Hf Ta W Re Os Ir Pt Au Hg Tl Pb Bi Po At Rn Fr Ra Ac Th Pa U Np Pu
    """.split()
)

KEYWORD_VOCABULARY = (
    "steel",
    "magnetic",
    "silicon",
    "chromium",
    "aluminum",
    "annealing",
    "rolling",
    "composition",
    "alloy",
    "coating",
    "iron loss",
    "grain-oriented",
)

PROCESS_VOCABULARY = (
    "hot rolling",
    "cold rolling",
    "annealing",
    "pickling",
    "quenching",
    "tempering",
    "coating",
    "casting",
    "decarburization",
    "nitriding",
)

TABLE_RE = re.compile(
    r"Table\s+(\d+)[^\n]*\n([\s\S]{50,2000}?)(?=\n\s*\n|\bTable\s+\d|\[\d{4}\]|\Z)",
    re.IGNORECASE,
)

_NUM = r"(\d+(?:\.\d+)?)"
_UNIT = r"(mass\s*%|wt\s*%|%)"
_TO = r"\s*(?:%?\s*to\s*|[-~–])\s*"

RANGE_PATTERNS = (
    # Si: 2.5-4.0%, Si 2.5 to 4.0 mass%
    (re.compile(r"\b([A-Z][a-z]?)\s*[:=]?\s*" + _NUM + _TO + _NUM + r"\s*" + _UNIT), "element_first"),
    # 2.5-4.0% Si, 2.5 to 4.0 mass% of Si
    (re.compile(_NUM + _TO + _NUM + r"\s*" + _UNIT + r"\s*(?:of\s+)?([A-Z][a-z]?)\b"), "value_first"),
)
SINGLE_PATTERNS = (
    (re.compile(r"\b([A-Z][a-z]?)\s*[:=]\s*" + _NUM + r"\s*" + _UNIT), "element_first"),
    (re.compile(r"(?<![\d.\-~])" + _NUM + r"\s*" + _UNIT + r"\s*(?:of\s+)?([A-Z][a-z]?)\b"), "value_first"),
)

TEMPERATURE_RE = re.compile(
    r"(\d{2,4})(?:\s*(?:°C|℃)?\s*(?:to|[-~–])\s*(\d{2,4}))?\s*(?:°\s?C|℃)"
)
SENTENCE_BREAK_RE = re.compile(r"[.!?]\s+|\n\s*\n|\[\d{4}\]\s*")
SENTENCE_END_RE = re.compile(r"[.!?](?=\s|\Z)")


def _unit(raw: str) -> str:
    return "wt%" if raw.lower().startswith("wt") else "mass%"


def extract_tables(text: str) -> list[Table]:
    tables: list[Table] = []
    seen: set[int] = set()
    for match in TABLE_RE.finditer(text):
        number = int(match.group(1))
        if number in seen:
            continue
        seen.add(number)
        tables.append(Table(table_number=number, content=collapse_whitespace(match.group(2))))
    return tables[:MAX_TABLES]


def _overlaps(start: int, end: int, spans: list[tuple[int, int]]) -> bool:
    return any(start < s_end and s_start < end for s_start, s_end in spans)


def _composition(m: re.Match[str], order: str, is_range: bool) -> Composition | None:
    groups = list(m.groups())
    element = groups.pop(0) if order == "element_first" else groups.pop()
    if element not in ELEMENTS:
        return None
    if is_range:
        low, high, unit = groups
        return Composition(element=element, unit=_unit(unit), min=float(low), max=float(high))
    value, unit = groups
    return Composition(element=element, unit=_unit(unit), value=float(value))


def _matches(text: str, patterns, is_range: bool) -> list[tuple[int, int, Composition]]:
    # element-first readings win over value-first readings of the same span
    out: list[tuple[int, int, Composition]] = []
    for pattern, order in patterns:
        taken = [(start, end) for start, end, _ in out]
        for m in pattern.finditer(text):
            if _overlaps(m.start(), m.end(), taken):
                continue
            comp = _composition(m, order, is_range)
            if comp is not None:
                out.append((m.start(), m.end(), comp))
    out.sort(key=lambda item: item[0])
    return out


def _covered(single: Composition, ranges: list[Composition]) -> bool:
    return any(
        r.element == single.element and r.min <= single.value <= r.max  # type: ignore[operator]
        for r in ranges
    )


def extract_compositions(text: str) -> list[Composition]:
    ranges: list[Composition] = []
    spans: list[tuple[int, int]] = []
    for start, end, comp in _matches(text, RANGE_PATTERNS, is_range=True):
        spans.append((start, end))
        if comp not in ranges:
            ranges.append(comp)

    singles: list[Composition] = []
    for start, end, comp in _matches(text, SINGLE_PATTERNS, is_range=False):
        if _overlaps(start, end, spans):
            continue
        if _covered(comp, ranges) or comp in singles:
            continue
        singles.append(comp)

    return (ranges + singles)[:MAX_COMPOSITIONS]


def _sentence_around(text: str, start: int, end: int) -> str:
    left = 0
    for m in SENTENCE_BREAK_RE.finditer(text, 0, start):
        left = m.end()
    stop = SENTENCE_END_RE.search(text, end)
    right = stop.end() if stop else len(text)
    return truncate(collapse_whitespace(text[left:right]), PROCESS_DESCRIPTION_CHARS)


def extract_technical_details(text: str) -> TechnicalDetails:
    temperatures: list[Temperature] = []
    for m in TEMPERATURE_RE.finditer(text):
        if m.group(2):
            temp = Temperature(raw=collapse_whitespace(m.group(0)), min=int(m.group(1)), max=int(m.group(2)))
        else:
            temp = Temperature(raw=collapse_whitespace(m.group(0)), value=int(m.group(1)))
        if any((t.min, t.max, t.value) == (temp.min, temp.max, temp.value) for t in temperatures):
            continue
        temperatures.append(temp)

    processes: list[ProcessMention] = []
    lowered = text.lower()
    for term in PROCESS_VOCABULARY:
        idx = lowered.find(term)
        if idx == -1:
            continue
        processes.append(ProcessMention(type=term, description=_sentence_around(text, idx, idx + len(term))))

    return TechnicalDetails(temperatures=tuple(temperatures[:MAX_TEMPERATURES]), processes=tuple(processes))


def extract_keywords(text: str) -> list[str]:
    lowered = text.lower()
    return [k for k in KEYWORD_VOCABULARY if k in lowered]
