"""
Topic classifier: maps an utterance onto one TopicCategory by keyword hits.
"""

from typing import Dict, List, Optional

from ares.patterns import PatternTable, load_pattern_table
from ares.schemas.topic import Topic, TopicCategory, TopicClassification

MAX_CONFIDENCE = 0.95
BASE_CONFIDENCE = 0.3
NO_HIT_CONFIDENCE = 0.2


class TopicClassifier:
    """Keyword-count classifier. Pure function of its keyword table."""

    def __init__(self, table: Optional[PatternTable] = None):
        table = table or load_pattern_table("topic_keywords")
        self.version = table.version
        # iterate in enum order regardless of file order so ties stay stable
        self.keywords: Dict[TopicCategory, List[str]] = {
            category: [kw.lower() for kw in table.get(category.value)]
            for category in TopicCategory
        }

    def classify(self, utterance: str) -> TopicClassification:
        text = (utterance or "").lower()

        best = TopicCategory.GENERAL
        best_hits: List[str] = []
        for category, keywords in self.keywords.items():
            hits = [kw for kw in keywords if kw in text]
            if len(hits) > len(best_hits):
                best, best_hits = category, hits

        if not best_hits:
            return TopicClassification(category=TopicCategory.GENERAL, confidence=NO_HIT_CONFIDENCE)

        word_count = max(1, len(text.split()))
        confidence = min(MAX_CONFIDENCE, BASE_CONFIDENCE + 2 * len(best_hits) / word_count)
        return TopicClassification(category=best, confidence=confidence, matched_keywords=best_hits)

    def keywords_for(self, category) -> List[str]:
        return self.keywords.get(TopicCategory.parse(category), [])


def topic_name(category, keywords: List[str]) -> str:
    label = TopicCategory.parse(category).label
    if not keywords:
        return label
    first = keywords[0]
    return f"{label}: {first[:1].upper()}{first[1:]}"


def topics_similar(a_category, a_name: str, b: Topic) -> bool:
    """Same category and one name equal to or contained in the other."""
    if TopicCategory.parse(a_category) != b.category:
        return False
    return a_name == b.name or a_name in b.name or b.name in a_name
