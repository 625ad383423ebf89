import pytest

from ares.patterns import PatternTable
from ares.services.narrative_classifier import (
    NarrativeClassifier,
    describe_excuse_type,
    detect_narrative,
    extract_relevant_clause,
)


def test_honest_admission():
    result = detect_narrative("Sorry, I skipped the workout, my bad")
    assert result.is_honest_admission is True
    assert result.detected is False
    assert result.confidence == 0.8

def test_excuse_with_causality():
    classifier = NarrativeClassifier()
    text = "I couldn't train because work was insane"
    assert classifier.has_causality(text)

    result = classifier.detect(text)
    assert result.detected is True
    assert result.excuse_type in ("excuse_time", "excuse_external")
    assert result.excuse_type == "excuse_external"
    assert result.original_claim == "work"
    assert result.confidence >= 0.75

def test_venting():
    result = detect_narrative("Ugh, what a brutal day")
    assert result.is_venting is True
    assert result.detected is False
    assert result.confidence == 0.7

def test_admission_beats_excuse_keywords():
    # tired is an energy excuse keyword, but nothing is used to justify the miss
    result = detect_narrative("I was tired and skipped leg day, sorry")
    assert result.is_honest_admission is True
    assert result.detected is False

def test_hedged_admission_is_an_excuse():
    result = detect_narrative("Sorry, I skipped it because I was exhausted")
    assert result.detected is True
    assert result.excuse_type == "excuse_energy"
    # failure indicator present
    assert result.confidence == 0.9

@pytest.mark.parametrize("text", [
    "I skipped the gym, was tired and busy",
    "Missed my workout yesterday, stressful week",
    "Ate way too much at the party with friends",
])
def test_no_causality_means_no_excuse(text):
    result = detect_narrative(text)
    assert result is None or result.detected is False

def test_venting_with_miss_is_not_plain_venting():
    result = detect_narrative("Ugh, I skipped my session today")
    assert result is None

def test_first_subtype_wins():
    result = detect_narrative("I had no time because I was so tired after work")
    assert result.excuse_type == "excuse_time"
    assert result.original_claim == "no time"

def test_rationalization():
    result = detect_narrative("Skipped training but whatever, it's one day")
    assert result.detected is True
    assert result.excuse_type == "rationalization"
    assert result.confidence == 0.6
    assert result.original_claim == "whatever, it's one day"

def test_causality_without_miss_or_keyword():
    assert detect_narrative("I went for a walk because the sun was out") is None

def test_short_input():
    assert detect_narrative("ok") is None
    assert detect_narrative("   ") is None
    assert detect_narrative("") is None

def test_extract_relevant_clause_fallback():
    text = "x" * 80
    assert extract_relevant_clause(text) == "x" * 50

def test_describe_excuse_type():
    assert describe_excuse_type("excuse_time").startswith("Time excuse")
    assert describe_excuse_type(None) == "Unclassified narrative"

@pytest.mark.parametrize("utterance,claim", [
    ("Skipped leg day, that's why I feel lighter today", "i feel lighter today"),
    ("Caved on dessert thanks to the buffet at the hotel", "the buffet at the hotel"),
])
def test_rationalization_clause_follows_any_causal_connective(utterance, claim):
    result = detect_narrative(utterance)
    assert result.excuse_type == "rationalization"
    assert result.original_claim == claim

def test_clause_regex_comes_from_the_table():
    table = PatternTable(name="narrative", version="test", entries={"causality": [r"\bseeing as\b"]})
    clause_re = NarrativeClassifier(table).clause_re
    assert extract_relevant_clause("missed it seeing as the gym was shut", clause_re) == "the gym was shut"
    assert NarrativeClassifier(PatternTable(name="narrative", version="test", entries={})).clause_re is None
