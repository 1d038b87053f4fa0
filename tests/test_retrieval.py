from patent_chat.retrieval import extract_question_keywords, in_document_order, rank_paragraphs, retrieve_evidence

from helpers import make_record, para, sample_record


def test_composition_question_ranks_composition_paragraph_first() -> None:
    record = make_record(
        [
            para(1, "The steel contains 2.5-4.0% Si."),
            para(2, "Hot rolling is performed at 1050-1150°C."),
        ]
    )
    ranked = rank_paragraphs(record, "What is the Si content?")
    assert [s.paragraph.number for s in ranked] == [1]
    assert ranked[0].score == 5


def test_keyword_and_topic_scores_accumulate() -> None:
    record = make_record(
        [
            para(1, "Annealing is carried out at 1200°C; annealing time is 20 hours."),
            para(2, "The coating improves insulation."),
        ]
    )
    ranked = rank_paragraphs(record, "What annealing temperature is used?")
    assert ranked[0].paragraph.number == 1
    assert ranked[0].score == 2 * 2 + 5  # two keyword hits plus the process bonus
    assert all(s.paragraph.number != 2 for s in ranked)


def test_question_keywords_drop_stop_words_and_short_words() -> None:
    assert extract_question_keywords("What is the Si content of this alloy?") == ["content", "alloy"]


def test_evidence_is_capped_and_sorted_by_number() -> None:
    paragraphs = [para(n, f"Rolling step {n} with annealing at low loss. " + "rolling " * (n % 4)) for n in range(1, 16)]
    evidence = retrieve_evidence(make_record(paragraphs), "How is rolling performed?")
    numbers = [p.number for p in evidence]
    assert len(numbers) == 10
    assert numbers == sorted(numbers)


def test_rank_order_is_stable_for_ties() -> None:
    paragraphs = [para(n, "The steel contains manganese.") for n in (3, 1, 2)]
    ranked = rank_paragraphs(make_record(paragraphs), "What does it contain?")
    assert [s.paragraph.number for s in ranked] == [3, 1, 2]


def test_no_paragraphs_returns_empty() -> None:
    assert rank_paragraphs(make_record([]), "what is this about") == []


def test_sample_record_retrieval() -> None:
    evidence = retrieve_evidence(sample_record(), "At what temperature is hot rolling performed?")
    assert 5 in [p.number for p in evidence]


def test_document_order_of_ranked_paragraphs() -> None:
    record = make_record(
        [
            para(4, "The sheet contains 3% Si."),
            para(9, "Composition: Si 3.2% and Mn 0.1% content, contains Al."),
        ]
    )
    ranked = rank_paragraphs(record, "What is the content?")
    assert [s.paragraph.number for s in ranked] == [9, 4]
    assert [p.number for p in in_document_order(ranked)] == [4, 9]
