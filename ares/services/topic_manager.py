"""
Topic lifecycle manager.

Keeps one active primary topic, up to MAX_SECONDARY_TOPICS paused ones that can be
resumed, and a bounded archive. Every operation takes a TopicState and returns a
new one; the caller owns persistence.

    active <-> paused -> archived
    active -> resolved (-> archived list)
"""

import logging
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import List, Optional

from ares.schemas.topic import (
    Topic,
    TopicCategory,
    TopicContext,
    TopicState,
    TopicStatus,
    TopicTransition,
    TopicUpdate,
)
from ares.services.shift_detector import ShiftDetector
from ares.services.topic_classifier import TopicClassifier, topic_name, topics_similar

logger = logging.getLogger("ares")

MAX_SECONDARY_TOPICS = 3
MAX_ARCHIVED_TOPICS = 10
MAX_DEPTH = 3.0
TOPIC_TIMEOUT_MINUTES = 30
FOLLOWUP_MIN_DEPTH = 1

SHIFT_CONFIDENCE_THRESHOLD = 0.6
CATEGORY_SWITCH_CONFIDENCE = 0.7
DEEPENING_MIN_LENGTH = 50


@lru_cache()
def get_topic_classifier() -> TopicClassifier:
    return TopicClassifier()


@lru_cache()
def get_shift_detector() -> ShiftDetector:
    return ShiftDetector()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_question(message: str) -> bool:
    return message.rstrip().endswith("?")


def create_initial_topic_state() -> TopicState:
    return TopicState()


def create_topic(category: TopicCategory, name: str, message: str, now: datetime) -> Topic:
    return Topic(
        name=name,
        category=category,
        status=TopicStatus.ACTIVE,
        depth=0,
        started_at=now,
        last_active_at=now,
        user_questions=[message] if _is_question(message) else [],
    )


def _pause_primary(state: TopicState, now: datetime) -> None:
    if state.primary is None:
        return
    state.primary.status = TopicStatus.PAUSED
    state.primary.last_active_at = now
    state.secondary.insert(0, state.primary)
    state.primary = None


def _trim(state: TopicState) -> None:
    if len(state.secondary) <= MAX_SECONDARY_TOPICS:
        return
    overflow = state.secondary[MAX_SECONDARY_TOPICS:]
    for topic in overflow:
        topic.status = TopicStatus.ARCHIVED
    state.archived = (overflow + state.archived)[:MAX_ARCHIVED_TOPICS]
    state.secondary = state.secondary[:MAX_SECONDARY_TOPICS]
    logger.debug("topics_archived", extra={"archived_ids": [t.id for t in overflow]})


def process_message(
    state: Optional[TopicState],
    message: str,
    is_user_message: bool = True,
    now: Optional[datetime] = None,
    classifier: Optional[TopicClassifier] = None,
    detector: Optional[ShiftDetector] = None,
) -> TopicUpdate:
    """
    Feed one message through the lifecycle and return the updated state.
    The input state is not modified.
    """
    now = now or _utcnow()
    message = message or ""
    classifier = classifier or get_topic_classifier()
    detector = detector or get_shift_detector()

    new_state = state.model_copy(deep=True) if state else create_initial_topic_state()
    transition: Optional[TopicTransition] = None

    shift_signal = detector.detect(message) if is_user_message else None
    classification = classifier.classify(message)
    category = classification.category
    name = topic_name(category, classification.matched_keywords)

    should_switch = (shift_signal is not None and shift_signal.confidence > SHIFT_CONFIDENCE_THRESHOLD) or (
        category != TopicCategory.GENERAL
        and new_state.primary is not None
        and new_state.primary.category != category
        and classification.confidence > CATEGORY_SWITCH_CONFIDENCE
    )

    if should_switch and is_user_message:
        previous = new_state.primary
        resumed = next((t for t in new_state.secondary if topics_similar(category, name, t)), None)

        if resumed is not None:
            new_state.secondary = [t for t in new_state.secondary if t.id != resumed.id]
            _pause_primary(new_state, now)
            resumed.status = TopicStatus.ACTIVE
            resumed.last_active_at = now
            resumed.depth = min(MAX_DEPTH, resumed.depth + 1)
            new_state.primary = resumed
            reason = "user_initiated"
        else:
            _pause_primary(new_state, now)
            new_state.primary = create_topic(category, name, message, now)
            reason = "user_initiated" if shift_signal else "natural_flow"

        transition = TopicTransition(
            from_topic=previous.model_copy(deep=True) if previous else None,
            to_topic=new_state.primary.model_copy(deep=True),
            reason=reason,
            timestamp=now,
        )
        new_state.last_shift_at = now
        new_state.shift_count += 1
        logger.info(
            "topic_shift",
            extra={
                "from": previous.name if previous else None,
                "to": new_state.primary.name,
                "reason": reason,
                "resumed": resumed is not None,
                "shift_type": shift_signal.type if shift_signal else None,
            },
        )

    elif new_state.primary is not None:
        primary = new_state.primary
        primary.last_active_at = now
        if is_user_message and len(message) > DEEPENING_MIN_LENGTH:
            primary.depth = min(MAX_DEPTH, primary.depth + 0.5)
        if is_user_message and _is_question(message):
            primary.user_questions.append(message)

    elif category != TopicCategory.GENERAL:
        # small talk never opens a topic on its own
        new_state.primary = create_topic(category, name, message, now)

    _trim(new_state)

    return TopicUpdate(
        state=new_state,
        transition=transition,
        shift_signal=shift_signal,
        classification=classification,
    )


def resolve_topic(state: TopicState, now: Optional[datetime] = None) -> TopicState:
    """Close the primary topic and resume the most recently paused one."""
    if state.primary is None:
        return state

    now = now or _utcnow()
    new_state = state.model_copy(deep=True)

    resolved = new_state.primary
    resolved.status = TopicStatus.RESOLVED
    resolved.resolved_at = now
    new_state.archived = ([resolved] + new_state.archived)[:MAX_ARCHIVED_TOPICS]

    if new_state.secondary:
        new_state.primary = new_state.secondary.pop(0)
        new_state.primary.status = TopicStatus.ACTIVE
        new_state.primary.last_active_at = now
    else:
        new_state.primary = None

    logger.info("topic_resolved", extra={"topic": resolved.name, "resumed": new_state.primary.name if new_state.primary else None})
    return new_state


def get_paused_topics_for_followup(state: TopicState, now: Optional[datetime] = None) -> List[Topic]:
    """Recently paused topics that went deep enough to be worth picking up again."""
    now = now or _utcnow()
    timeout = timedelta(minutes=TOPIC_TIMEOUT_MINUTES)
    return [
        topic for topic in state.secondary
        if now - topic.last_active_at < timeout and topic.depth > FOLLOWUP_MIN_DEPTH
    ]


def add_key_point(state: TopicState, point: str) -> TopicState:
    if state.primary is None or not point.strip():
        return state
    new_state = state.model_copy(deep=True)
    new_state.primary.key_points.append(point.strip())
    return new_state


def add_pending_followup(state: TopicState, note: str) -> TopicState:
    if state.primary is None or not note.strip():
        return state
    new_state = state.model_copy(deep=True)
    new_state.primary.pending_followups.append(note.strip())
    return new_state


def build_topic_context(state: TopicState) -> TopicContext:
    if state.primary is None:
        return TopicContext(paused_topics=[t.name for t in state.secondary])
    return TopicContext(
        primary_name=state.primary.name,
        primary_depth=state.primary.depth,
        key_points=list(state.primary.key_points),
        paused_topics=[t.name for t in state.secondary],
    )
