from patent_chat.paragraphs import extract_numbered_paragraphs, find_gaps

from helpers import para, sample_text

SCENARIO_TEXT = "[0001] The steel contains 2.5-4.0% Si. [0002] Hot rolling is performed at 1050-1150°C."


def test_extracts_numbered_paragraphs_in_order() -> None:
    paragraphs = extract_numbered_paragraphs(SCENARIO_TEXT)
    assert [p.number for p in paragraphs] == [1, 2]
    assert paragraphs[0].content == "The steel contains 2.5-4.0% Si."
    assert paragraphs[0].marker == "[0001]"
    assert paragraphs[1].content == "Hot rolling is performed at 1050-1150°C."


def test_paragraph_stops_at_heading() -> None:
    paragraphs = extract_numbered_paragraphs(sample_text())
    assert [p.number for p in paragraphs] == [1, 2, 3, 4, 5, 6, 7]
    first = paragraphs[0]
    assert first.content.endswith("iron core material of transformers.")
    assert "BACKGROUND" not in first.content
    last = paragraphs[-1]
    assert "Table 1 Magnetic properties" in last.content
    assert "Claims" not in last.content


def test_duplicate_numbers_keep_longest_content() -> None:
    text = "[0003] Short version of it.\n\n[0003] A much longer version of the same paragraph text."
    paragraphs = extract_numbered_paragraphs(text)
    assert len(paragraphs) == 1
    assert paragraphs[0].content == "A much longer version of the same paragraph text."


def test_rejects_short_and_out_of_range_paragraphs() -> None:
    text = "[0000] Paragraph zero is never valid here. [0005] too short [0006] This one is long enough to keep."
    paragraphs = extract_numbered_paragraphs(text)
    assert [p.number for p in paragraphs] == [6]


def test_unpadded_and_lenticular_markers() -> None:
    text = "[12] Unpadded marker paragraph content here.\n【0013】Lenticular bracket paragraph content."
    paragraphs = extract_numbered_paragraphs(text)
    assert [p.number for p in paragraphs] == [12, 13]
    assert paragraphs[0].marker == "[0012]"
    assert paragraphs[1].content == "Lenticular bracket paragraph content."


def test_extraction_is_deterministic() -> None:
    text = sample_text()
    assert extract_numbered_paragraphs(text) == extract_numbered_paragraphs(text)


def test_no_markers_yields_empty_list() -> None:
    assert extract_numbered_paragraphs("Plain text without any paragraph numbering.") == []


def test_find_gaps() -> None:
    paragraphs = [para(1, "a"), para(2, "b"), para(5, "c"), para(9, "d")]
    assert find_gaps(paragraphs) == [(2, 5), (5, 9)]


def test_all_caps_first_line_is_kept() -> None:
    paragraphs = extract_numbered_paragraphs(
        "[0001]\nGRAIN-ORIENTED ELECTRICAL\nsteel sheets are used for transformer cores."
    )
    assert [p.number for p in paragraphs] == [1]
    assert paragraphs[0].content == "GRAIN-ORIENTED ELECTRICAL steel sheets are used for transformer cores."
