"""
Dialogue engine: one inbound utterance in, one TurnResult out.

DialogueEngine.process_turn is pure over its inputs (state in, new state out).
DialogueService wraps it with the session store and the profile lookup.
"""

import logging
import random
from datetime import datetime, timezone
from typing import Optional

from langsmith import traceable
from sqlalchemy.ext.asyncio import AsyncSession

from ares.config import settings
from ares.schemas.suggestion import UserGoals
from ares.schemas.topic import TopicState
from ares.schemas.turn import TurnResult
from ares.services.directive_composer import compose_directive
from ares.services.identity_resolver import resolve_identity, resolve_identity_safely
from ares.services.narrative_classifier import NarrativeClassifier, get_narrative_classifier
from ares.services.session_store import SessionStore
from ares.services.shift_detector import ShiftDetector
from ares.services.topic_classifier import TopicClassifier
from ares.services.topic_manager import (
    build_topic_context,
    get_paused_topics_for_followup,
    get_shift_detector,
    get_topic_classifier,
    process_message,
)
from ares.services.topic_suggester import TopicSuggester

logger = logging.getLogger("ares")


class DialogueEngine:

    def __init__(
        self,
        classifier: Optional[TopicClassifier] = None,
        detector: Optional[ShiftDetector] = None,
        narrative: Optional[NarrativeClassifier] = None,
        suggester: Optional[TopicSuggester] = None,
        rng: Optional[random.Random] = None,
    ):
        self.classifier = classifier or get_topic_classifier()
        self.detector = detector or get_shift_detector()
        self.narrative = narrative or get_narrative_classifier()
        self.suggester = suggester or TopicSuggester(classifier=self.classifier, rng=rng)

    @traceable(run_type="chain", name="dialogue_turn")
    def process_turn(
        self,
        utterance: str,
        state: Optional[TopicState] = None,
        protocol_mode: Optional[str] = None,
        goals: Optional[UserGoals] = None,
        deviation: Optional[str] = None,
        now: Optional[datetime] = None,
        suggestions: bool = True,
        resurface: bool = True,
    ) -> TurnResult:
        now = now or datetime.now(timezone.utc)

        update = process_message(
            state,
            utterance,
            is_user_message=True,
            now=now,
            classifier=self.classifier,
            detector=self.detector,
        )
        analysis = self.narrative.detect(utterance)
        identity = resolve_identity(protocol_mode)
        directive = compose_directive(analysis, identity, deviation=deviation)

        suggestion = self.suggester.suggest(update.state, goals) if suggestions else None

        cue = None
        if resurface:
            candidates = get_paused_topics_for_followup(update.state, now=now)
            if candidates:
                cue = self.suggester.resurface_cue(candidates[0], now=now)

        return TurnResult(
            state=update.state,
            classification=update.classification,
            transition=update.transition,
            shift_signal=update.shift_signal,
            narrative=analysis,
            identity=identity,
            directive=directive,
            topic_context=build_topic_context(update.state),
            suggestion=suggestion,
            resurface=cue,
        )


class DialogueService:
    """Load state, run the engine, persist the new state."""

    def __init__(self, db: AsyncSession, engine: Optional[DialogueEngine] = None):
        self.store = SessionStore(db)
        self.engine = engine or DialogueEngine()

    async def handle_turn(
        self,
        session_id: str,
        user_id: int,
        utterance: str,
        goals: Optional[UserGoals] = None,
        deviation: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> TurnResult:
        state, version = await self.store.load(session_id)

        identity = await resolve_identity_safely(lambda: self.store.fetch_protocol_mode(user_id))
        if goals is None:
            try:
                keywords = await self.store.fetch_goal_keywords(user_id)
            except Exception as e:
                logger.warning("goal_fetch_failed", extra={"user_id": user_id, "error": repr(e)})
                keywords = []
            goals = UserGoals(keywords=keywords) if keywords else None

        result = self.engine.process_turn(
            utterance,
            state=state,
            protocol_mode=identity.protocol_mode.value,
            goals=goals,
            deviation=deviation,
            now=now,
            suggestions=settings.suggestions_enabled,
            resurface=settings.resurface_enabled,
        )

        # escalation gate is the caller's call, the engine never abstains
        if result.directive and result.directive.confidence < settings.escalation_min_confidence:
            logger.info(
                "directive_suppressed",
                extra={"confidence": result.directive.confidence, "threshold": settings.escalation_min_confidence},
            )
            result = result.model_copy(update={"directive": None})

        await self.store.save(session_id, user_id, result.state, version)
        return result
