"""
Topic-graph suggester: proposes the next subject to raise, and how to come back
to a paused one. Reads the canonical TopicState; keeps no state of its own.
"""

import random
from datetime import datetime, timezone
from typing import List, Optional, Set

from ares.patterns import TopicGraphTable, load_topic_graph
from ares.schemas.suggestion import ProactiveSuggestion, ResurfaceCue, UserGoals
from ares.schemas.topic import Topic, TopicCategory, TopicState
from ares.services.topic_classifier import TopicClassifier
from ares.services.topic_manager import get_topic_classifier

MEDIUM_PRIORITY_DEPTH = 2


def _time_context(paused_minutes: int) -> str:
    if paused_minutes < 5:
        return "just now"
    if paused_minutes < 15:
        return "a few minutes ago"
    return "earlier"


class TopicSuggester:

    def __init__(
        self,
        graph: Optional[TopicGraphTable] = None,
        classifier: Optional[TopicClassifier] = None,
        rng: Optional[random.Random] = None,
    ):
        self.graph = graph or load_topic_graph()
        self.classifier = classifier or get_topic_classifier()
        self.rng = rng or random.Random()

    def discussed_categories(self, state: TopicState) -> Set[TopicCategory]:
        return {t.category for t in state.all_topics()}

    def _goal_relevant(self, candidates: List[TopicCategory], goals: Optional[UserGoals]) -> List[TopicCategory]:
        if not goals or not goals.keywords:
            return []
        goal_keywords = [g.lower() for g in goals.keywords]
        return [
            category for category in candidates
            if any(kw in gk for kw in self.classifier.keywords_for(category) for gk in goal_keywords)
        ]

    def suggest(self, state: TopicState, goals: Optional[UserGoals] = None) -> Optional[ProactiveSuggestion]:
        """At most one suggestion, adjacent to the current primary topic."""
        if state.primary is None or state.primary.category == TopicCategory.GENERAL:
            return None

        current = state.primary.category
        connection = self.graph.connections.get(current.value)
        if connection is None:
            return None

        discussed = self.discussed_categories(state)
        undiscussed = [
            category for category in (TopicCategory.parse(c) for c in connection.related)
            if category not in discussed and category != TopicCategory.GENERAL
        ]
        if not undiscussed:
            return None

        goal_relevant = self._goal_relevant(undiscussed, goals)
        prioritized = goal_relevant or undiscussed
        next_topic = self.rng.choice(prioritized)

        if goal_relevant:
            priority = "high"
        elif state.primary.depth >= MEDIUM_PRIORITY_DEPTH:
            priority = "medium"
        else:
            priority = "low"

        return ProactiveSuggestion(
            current_topic=current,
            next_topic=next_topic,
            transition=self.rng.choice(connection.phrases),
            priority=priority,
            reason=f"Logical link from {current.value} to {next_topic.value}",
        )

    def resurface_cue(self, topic: Topic, now: Optional[datetime] = None) -> ResurfaceCue:
        now = now or datetime.now(timezone.utc)
        paused_minutes = max(0, round((now - topic.last_active_at).total_seconds() / 60))
        time_context = _time_context(paused_minutes)

        phrases = self.graph.resurface_phrases.get(topic.category.value) or self.graph.resurface_phrases.get("default") or [
            "Back to {topic}..."
        ]
        phrase = self.rng.choice(phrases).format(
            topic=topic.name,
            time_context=time_context,
            time_context_cap=time_context.capitalize(),
        )
        return ResurfaceCue(
            topic_id=topic.id,
            topic_name=topic.name,
            category=topic.category,
            paused_minutes=paused_minutes,
            time_context=time_context,
            phrase=phrase,
        )
