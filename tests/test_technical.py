from patent_chat.models import Composition
from patent_chat.technical import (
    extract_compositions,
    extract_keywords,
    extract_tables,
    extract_technical_details,
)

from helpers import sample_text


def test_compositions_from_sample() -> None:
    compositions = extract_compositions(sample_text())
    assert compositions == [
        Composition(element="Si", unit="mass%", min=2.5, max=4.0),
        Composition(element="Al", unit="mass%", min=0.01, max=0.05),
        Composition(element="Mn", unit="mass%", min=0.05, max=0.2),
        Composition(element="C", unit="mass%", value=0.03),
    ]


def test_value_first_range_and_units() -> None:
    compositions = extract_compositions("The steel contains 2.5-4.0% Si and Cr 10 to 12 wt% as well.")
    assert Composition(element="Si", unit="mass%", min=2.5, max=4.0) in compositions
    assert Composition(element="Cr", unit="wt%", min=10.0, max=12.0) in compositions


def test_single_value_inside_range_is_dropped() -> None:
    compositions = extract_compositions("Si: 2.5-4.0% in general and Si: 3.0% in the example; N: 0.008%.")
    assert [c.describe() for c in compositions] == ["Si: 2.5-4mass%", "N: 0.008mass%"]


def test_non_element_tokens_are_ignored() -> None:
    assert extract_compositions("Yield: 80-90% of the batch") == []


def test_temperatures_deduplicated() -> None:
    details = extract_technical_details(sample_text())
    temps = details.temperatures
    assert [(t.min, t.max, t.value) for t in temps] == [(1050, 1150, None), (None, None, 1200)]
    assert temps[0].raw == "1050-1150°C"
    assert temps[0].unit == "°C"


def test_process_mentions_first_occurrence() -> None:
    details = extract_technical_details(sample_text())
    kinds = [p.type for p in details.processes]
    assert kinds == ["hot rolling", "cold rolling", "annealing"]
    hot = details.processes[0]
    assert hot.description.startswith("The steel sheet contains")
    assert hot.description.endswith("under controlled conditions.")
    assert all(len(p.description) <= 200 for p in details.processes)


def test_keywords_in_vocabulary_order() -> None:
    assert extract_keywords(sample_text()) == [
        "steel",
        "magnetic",
        "annealing",
        "rolling",
        "iron loss",
        "grain-oriented",
    ]


def test_tables() -> None:
    tables = extract_tables(sample_text())
    assert len(tables) == 1
    assert tables[0].table_number == 1
    assert tables[0].type == "explicit"
    assert tables[0].content.startswith("Steel A: iron loss")
