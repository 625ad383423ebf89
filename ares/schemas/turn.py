from pydantic import BaseModel
from typing import Optional

from ares.schemas.directive import Directive
from ares.schemas.identity import IdentityContext
from ares.schemas.narrative import NarrativeAnalysis
from ares.schemas.suggestion import ProactiveSuggestion, ResurfaceCue
from ares.schemas.topic import (
    ShiftSignal,
    TopicClassification,
    TopicContext,
    TopicState,
    TopicTransition,
)


class TurnResult(BaseModel):
    """Everything the engine decided for one inbound utterance."""
    state: TopicState
    classification: TopicClassification
    transition: Optional[TopicTransition] = None
    shift_signal: Optional[ShiftSignal] = None
    narrative: Optional[NarrativeAnalysis] = None
    identity: IdentityContext
    directive: Optional[Directive] = None
    topic_context: TopicContext
    suggestion: Optional[ProactiveSuggestion] = None
    resurface: Optional[ResurfaceCue] = None

    def prompt_sections(self) -> str:
        """Prompt-injection blocks for the generator, in priority order."""
        depth = self.state.primary.depth if self.state.primary else 0.0
        parts = [
            self.directive.render() if self.directive else "",
            self.topic_context.render(),
            self.suggestion.render(depth) if self.suggestion else "",
        ]
        return "\n\n".join(p for p in parts if p)
