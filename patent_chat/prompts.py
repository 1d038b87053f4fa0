from __future__ import annotations

from typing import Sequence

from patent_chat.models import Paragraph, PatentRecord
from patent_chat.text_utils import truncate

ANSWER_CHAR_BUDGET = 600
FALLBACK_CONTEXT_PARAGRAPHS = 15
PARAGRAPH_EXCERPT_CHARS = 1200
MAX_PROMPT_COMPOSITIONS = 10
MAX_PROMPT_TEMPERATURES = 5

SYSTEM_PROMPT = f"""You are a patent analysis assistant. Answer questions based ONLY on the provided patent information.

RULES:
1. Base every statement on the numbered paragraphs provided.
2. Cite each fact with its paragraph marker exactly as shown, e.g. [0012].
3. Keep the answer concise and technical (at most {ANSWER_CHAR_BUDGET} characters).
4. Mention specific values: compositions, temperatures, process parameters, properties.
5. If the paragraphs do not answer the question, say so instead of guessing.

Example: "The steel contains 2.5-4.0% Si [0012]. Hot rolling is performed at 1050-1150°C [0034]."
"""


def build_prompt(record: PatentRecord, question: str, evidence: Sequence[Paragraph]) -> str:
    lines = [
        f"Patent Document: {record.patent_number}",
        f"Title: {record.title}",
        "",
        "Abstract:",
        record.abstract,
        "",
    ]

    if evidence:
        lines.append("Relevant Paragraphs:")
        context = evidence
    else:
        lines.append("Description Paragraphs:")
        context = record.numbered_paragraphs[:FALLBACK_CONTEXT_PARAGRAPHS]
    for para in context:
        lines.append(f"{para.marker} {truncate(para.content, PARAGRAPH_EXCERPT_CHARS, '...')}")
    if not context:
        lines.append("(no numbered paragraphs available)")
    lines.append("")

    if record.compositions:
        lines.append("Composition Details:")
        lines.extend(c.describe() for c in record.compositions[:MAX_PROMPT_COMPOSITIONS])
        lines.append("")

    temperatures = record.technical_details.temperatures
    if temperatures:
        lines.append("Temperatures:")
        lines.extend(t.raw for t in temperatures[:MAX_PROMPT_TEMPERATURES])
        lines.append("")

    lines.append(f"Question: {question}")
    lines.append("")
    lines.append(
        "Instructions: Provide a precise, technical answer based on the patent content above. "
        "Cite the supporting paragraph markers (for example [0001]) after each statement. "
        f"Keep the answer under {ANSWER_CHAR_BUDGET} characters."
    )
    return "\n".join(lines)


def build_messages(prompt: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]
