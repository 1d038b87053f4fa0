from patent_chat.sections import estimate_page, extract_sections, page_for_paragraph

from helpers import sample_text


def test_sections_in_document_order() -> None:
    sections = extract_sections(sample_text(), num_pages=5)
    assert [s.name for s in sections] == [
        "Technical Field",
        "Background Art",
        "Description Of Embodiments",
        "Examples",
    ]
    field = sections[0]
    assert field.content.startswith("The present invention relates to")
    assert "[0001]" not in field.content
    assert "BACKGROUND" not in field.content


def test_section_pages_follow_preceding_marker() -> None:
    sections = {s.name: s for s in extract_sections(sample_text(), num_pages=5)}
    assert sections["Background Art"].page == 1
    assert sections["Examples"].page == 2


def test_synonym_heading_and_short_body() -> None:
    body = "The invention concerns a method of joining two sheets by laser welding under argon."
    text = f"FIELD OF THE INVENTION\n{body}\n\nSUMMARY OF THE INVENTION\nToo short.\n"
    sections = extract_sections(text, num_pages=1)
    assert [s.name for s in sections] == ["Technical Field"]
    assert sections[0].content == body


def test_page_for_paragraph() -> None:
    assert page_for_paragraph(1) == 1
    assert page_for_paragraph(5) == 1
    assert page_for_paragraph(6) == 2
    assert page_for_paragraph(60, num_pages=4) == 4


def test_estimate_page_interpolates_without_markers() -> None:
    text = "x" * 1000
    assert estimate_page(text, 0, 4) == 1
    assert estimate_page(text, 600, 4) == 3
    assert estimate_page(text, 999, 4) == 4
