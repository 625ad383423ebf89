"""
Narrative classifier.

Separates three ways a user talks about a missed target:
- HONEST ADMISSION: owns the miss ("skipped it, my bad"). No escalation.
- VENTING: blows off steam without tying it to a miss ("ugh, what a day"). No escalation.
- EXCUSE: uses causal language to justify the miss ("couldn't train because work").
  Only this one is escalated into a correction directive.

An admission is taken at face value unless it is hedged with a causal connective,
so the admission check runs before anything else.
"""

import logging
import re
from functools import lru_cache
from typing import Dict, List, Optional, Pattern, Tuple

from ares.patterns import PatternTable, load_pattern_table
from ares.schemas.narrative import ExcuseType, NarrativeAnalysis

logger = logging.getLogger("ares")

MIN_LENGTH = 5

# scanned in this order, first subtype with a hit wins
EXCUSE_SUBTYPES: Tuple[ExcuseType, ...] = (
    "excuse_time",
    "excuse_energy",
    "excuse_emotional",
    "excuse_external",
)

EXCUSE_DESCRIPTIONS: Dict[str, str] = {
    "excuse_time": 'Time excuse ("no time", "didn\'t get to it")',
    "excuse_energy": 'Energy excuse ("tired", "exhausted")',
    "excuse_emotional": 'Emotional excuse ("stress", "needed that")',
    "excuse_external": 'External blame ("boss", "partner", "weather")',
    "rationalization": 'Rationalization ("you have to live a little", "just this once")',
}

HONEST_ADMISSION_CONFIDENCE = 0.8
VENTING_CONFIDENCE = 0.7
EXCUSE_CONFIDENCE = 0.75
EXCUSE_WITH_FAILURE_CONFIDENCE = 0.9
RATIONALIZATION_CONFIDENCE = 0.6

CLAIM_FALLBACK_LENGTH = 50


def _compile(patterns: List[str]) -> List[Pattern]:
    return [re.compile(p, re.IGNORECASE) for p in patterns]


def _first_match(patterns: List[Pattern], text: str) -> Optional[str]:
    for pattern in patterns:
        m = pattern.search(text)
        if m:
            return m.group(0)
    return None


def describe_excuse_type(excuse_type: Optional[str]) -> str:
    return EXCUSE_DESCRIPTIONS.get(excuse_type or "", "Unclassified narrative")


def build_clause_re(causality: List[str]) -> Optional[Pattern]:
    """One regex capturing what follows any of the causal connectives."""
    if not causality:
        return None
    connectives = "|".join(f"(?:{p})" for p in causality)
    return re.compile(rf"(?:{connectives})\s+(.{{5,50}})", re.IGNORECASE)


def extract_relevant_clause(text: str, clause_re: Optional[Pattern] = None) -> str:
    """The part after the causal connective, else the opening of the message."""
    if clause_re is None:
        clause_re = get_narrative_classifier().clause_re
    m = clause_re.search(text) if clause_re else None
    if m:
        return m.group(1).strip()
    return text[:CLAIM_FALLBACK_LENGTH]


class NarrativeClassifier:

    def __init__(self, table: Optional[PatternTable] = None):
        table = table or load_pattern_table("narrative")
        self.version = table.version
        self.causality = _compile(table.get("causality"))
        self.clause_re = build_clause_re(table.get("causality"))
        self.honest_admission = _compile(table.get("honest_admission"))
        self.venting = _compile(table.get("venting"))
        self.failure = _compile(table.get("failure"))
        self.excuse_keywords: Dict[str, List[Pattern]] = {
            subtype: _compile(table.get(subtype)) for subtype in EXCUSE_SUBTYPES
        }

    def has_causality(self, utterance: str) -> bool:
        return _first_match(self.causality, (utterance or "").lower().strip()) is not None

    def detect(self, utterance: str) -> Optional[NarrativeAnalysis]:
        text = (utterance or "").lower().strip()

        if len(text) < MIN_LENGTH:
            return None

        # 1. honest admission wins unless it is hedged with a justification
        is_honest_admission = _first_match(self.honest_admission, text) is not None
        has_causality = _first_match(self.causality, text) is not None

        if is_honest_admission and not has_causality:
            return NarrativeAnalysis(is_honest_admission=True, confidence=HONEST_ADMISSION_CONFIDENCE)

        # 2. venting without a concrete miss is just blowing off steam
        is_venting = _first_match(self.venting, text) is not None
        has_failure_indicator = _first_match(self.failure, text) is not None

        if is_venting and not has_failure_indicator and not has_causality:
            return NarrativeAnalysis(is_venting=True, confidence=VENTING_CONFIDENCE)

        # 3. an excuse needs a causal connective
        if not has_causality:
            return None

        for subtype in EXCUSE_SUBTYPES:
            keyword = _first_match(self.excuse_keywords[subtype], text)
            if keyword:
                confidence = EXCUSE_WITH_FAILURE_CONFIDENCE if has_failure_indicator else EXCUSE_CONFIDENCE
                logger.info("excuse_detected", extra={"excuse_type": subtype, "confidence": confidence})
                return NarrativeAnalysis(
                    detected=True,
                    excuse_type=subtype,
                    original_claim=keyword,
                    confidence=confidence,
                )

        if has_failure_indicator:
            logger.info("excuse_detected", extra={"excuse_type": "rationalization", "confidence": RATIONALIZATION_CONFIDENCE})
            return NarrativeAnalysis(
                detected=True,
                excuse_type="rationalization",
                original_claim=extract_relevant_clause(text, self.clause_re),
                confidence=RATIONALIZATION_CONFIDENCE,
            )

        return None


@lru_cache()
def get_narrative_classifier() -> NarrativeClassifier:
    return NarrativeClassifier()


def detect_narrative(utterance: str) -> Optional[NarrativeAnalysis]:
    return get_narrative_classifier().detect(utterance)
