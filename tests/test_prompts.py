from patent_chat.prompts import SYSTEM_PROMPT, build_messages, build_prompt

from helpers import make_record, para, sample_record


def test_prompt_lists_evidence_with_markers() -> None:
    record = sample_record()
    evidence = [record.paragraph(4), record.paragraph(5)]
    prompt = build_prompt(record, "What is the Si content?", evidence)
    assert prompt.startswith("Patent Document: EP3456789A1\nTitle: GRAIN-ORIENTED")
    assert "Relevant Paragraphs:\n[0004] The steel slab contains" in prompt
    assert "[0005] Hot rolling" in prompt
    assert "[0001]" not in prompt.split("Instructions:")[0]
    assert "Composition Details:\nSi: 2.5-4mass%" in prompt
    assert "Temperatures:\n1050-1150°C\n1200°C" in prompt
    assert "Question: What is the Si content?" in prompt


def test_prompt_falls_back_to_first_paragraphs() -> None:
    record = make_record([para(n, f"Paragraph number {n} describing the steel.") for n in range(1, 21)])
    prompt = build_prompt(record, "anything", [])
    assert "Description Paragraphs:" in prompt
    assert "[0015] Paragraph number 15" in prompt
    assert "[0016]" not in prompt


def test_prompt_without_paragraphs() -> None:
    prompt = build_prompt(make_record([]), "what is this about", [])
    assert "(no numbered paragraphs available)" in prompt
    assert "Composition Details:" not in prompt


def test_prompt_is_deterministic() -> None:
    record = sample_record()
    evidence = list(record.numbered_paragraphs[:3])
    assert build_prompt(record, "q?", evidence) == build_prompt(record, "q?", evidence)


def test_messages_carry_system_prompt() -> None:
    messages = build_messages("user prompt")
    assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert messages[1] == {"role": "user", "content": "user prompt"}
    assert "[0012]" in SYSTEM_PROMPT
