from ares.schemas.directive import Directive, DirectiveStep
from ares.schemas.identity import IdentityContext, ProtocolMode
from ares.schemas.narrative import ExcuseType, NarrativeAnalysis
from ares.schemas.suggestion import ProactiveSuggestion, ResurfaceCue, UserGoals
from ares.schemas.topic import (
    ShiftSignal,
    Topic,
    TopicCategory,
    TopicClassification,
    TopicContext,
    TopicState,
    TopicStatus,
    TopicTransition,
    TopicUpdate,
)
from ares.schemas.turn import TurnResult
