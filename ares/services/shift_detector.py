"""
Shift signal detector: does the user want to change the subject?
"""

import re
from typing import Dict, List, Optional

from ares.patterns import PatternTable, load_pattern_table
from ares.schemas.topic import ShiftSignal

# explicit phrases are checked before implicit ones, interrogative openers last
SHIFT_ORDER = ("explicit", "implicit", "tangent", "question")

SHIFT_CONFIDENCE: Dict[str, float] = {
    "explicit": 0.9,
    "implicit": 0.7,
    "tangent": 0.5,
    "question": 0.4,
}

MAX_QUESTION_LENGTH = 100


class ShiftDetector:

    def __init__(self, table: Optional[PatternTable] = None):
        table = table or load_pattern_table("shift_phrases")
        self.version = table.version
        self.phrases: Dict[str, List[str]] = {
            shift_type: [p.lower() for p in table.get(shift_type)] for shift_type in SHIFT_ORDER
        }
        openers = [re.escape(w.lower()) for w in table.get("interrogative_openers")]
        self.opener_re = re.compile(r"^\s*(%s)\b" % "|".join(openers), re.IGNORECASE) if openers else None

    def detect(self, utterance: str) -> Optional[ShiftSignal]:
        text = (utterance or "").lower()

        for shift_type in SHIFT_ORDER:
            for phrase in self.phrases[shift_type]:
                if phrase in text:
                    return ShiftSignal(
                        type=shift_type,
                        confidence=SHIFT_CONFIDENCE[shift_type],
                        detected_phrase=phrase,
                    )

        if self.opener_re and len(text) < MAX_QUESTION_LENGTH:
            m = self.opener_re.match(text)
            if m:
                return ShiftSignal(
                    type="question",
                    confidence=SHIFT_CONFIDENCE["question"],
                    detected_phrase=m.group(1),
                )

        return None
