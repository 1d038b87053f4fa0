from __future__ import annotations

import re

# Canonical heading -> accepted spellings, in scan order.
SECTION_HEADINGS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("TECHNICAL FIELD", ("TECHNICAL FIELD", "FIELD OF THE INVENTION", "FIELD OF INVENTION")),
    ("BACKGROUND ART", ("BACKGROUND ART", "BACKGROUND OF THE INVENTION", "BACKGROUND")),
    ("SUMMARY OF INVENTION", ("SUMMARY OF INVENTION", "SUMMARY OF THE INVENTION", "DISCLOSURE OF INVENTION")),
    ("TECHNICAL PROBLEM", ("TECHNICAL PROBLEM", "PROBLEMS TO BE SOLVED")),
    ("SOLUTION TO PROBLEM", ("SOLUTION TO PROBLEM", "MEANS FOR SOLVING THE PROBLEMS")),
    ("ADVANTAGEOUS EFFECTS", ("ADVANTAGEOUS EFFECTS", "ADVANTAGEOUS EFFECTS OF INVENTION", "EFFECTS OF THE INVENTION")),
    (
        "DESCRIPTION OF EMBODIMENTS",
        ("DESCRIPTION OF EMBODIMENTS", "DETAILED DESCRIPTION", "MODE FOR CARRYING OUT THE INVENTION"),
    ),
    ("BEST MODE", ("BEST MODE", "BEST MODE FOR CARRYING OUT THE INVENTION")),
    ("EXAMPLES", ("EXAMPLES", "EXAMPLE")),
    ("INDUSTRIAL APPLICABILITY", ("INDUSTRIAL APPLICABILITY",)),
)

CLAIMS_HEADINGS = ("Claims", "CLAIMS", "What is claimed is", "We claim")


def _spelling_pattern(spelling: str) -> str:
    return r"\s+".join(re.escape(word) for word in spelling.split())


_KNOWN = sorted(
    {s for _, spellings in SECTION_HEADINGS for s in spellings},
    key=len,
    reverse=True,
)

# A line that looks like a heading: all caps, or a known heading in any case.
HEADING_LINE_RE = re.compile(
    r"^[ \t]*[\[【]?(?:"
    r"[A-Z][A-Z \t/&-]{9,}"
    r"|(?i:" + "|".join(_spelling_pattern(s) for s in _KNOWN) + r")"
    r"|" + "|".join(re.escape(c) for c in CLAIMS_HEADINGS) +
    r")[\]】]?[ \t]*:?[ \t]*$",
    re.MULTILINE,
)


def heading_pattern(spellings: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(_spelling_pattern(s) for s in sorted(spellings, key=len, reverse=True))
    return re.compile(
        r"^[ \t]*[\[【]?(?:" + alternatives + r")[\]】]?[ \t]*:?[ \t]*$",
        re.IGNORECASE | re.MULTILINE,
    )


def next_heading(text: str, start: int = 0) -> int | None:
    match = HEADING_LINE_RE.search(text, start)
    return match.start() if match else None


def cut_at_heading(body: str) -> str:
    """Cut ``body`` at the first heading-like line after its opening line."""
    first_break = body.find("\n")
    if first_break == -1:
        return body
    end = next_heading(body, first_break + 1)
    return body if end is None else body[:end]


def format_section_name(name: str) -> str:
    return " ".join(word[:1] + word[1:].lower() for word in name.split())
