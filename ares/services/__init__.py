"""
ARES services package.
"""

from ares.services.topic_classifier import TopicClassifier
from ares.services.shift_detector import ShiftDetector
from ares.services.narrative_classifier import NarrativeClassifier, detect_narrative
from ares.services.identity_resolver import normalize_protocol_mode, resolve_identity
from ares.services.directive_composer import compose_directive
from ares.services.topic_suggester import TopicSuggester
from ares.services.session_store import SessionStore, StaleSessionError
from ares.services.dialogue_engine import DialogueEngine, DialogueService
