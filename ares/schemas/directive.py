from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from ares.schemas.identity import ProtocolMode
from ares.schemas.narrative import ExcuseType

StepKind = Literal[
    "name_deviation",
    "challenge_narrative",
    "identity_reference",
    "process_fix",
    "warm_close",
]


class DirectiveStep(BaseModel):
    order: int = Field(..., ge=1)
    kind: StepKind
    instruction: str


class Directive(BaseModel):
    """
    Structured correction template for the downstream text generator.
    Never user-facing prose: every field is an instruction about what to say.
    """
    steps: List[DirectiveStep]
    forbidden_phrases: List[str]
    bounce_back_rule: str
    excuse_type: ExcuseType
    excuse_description: str
    original_claim: str
    deviation: Optional[str] = None
    protocol_mode: ProtocolMode
    identity_label: str
    challenge_intensity: int = Field(..., ge=1, le=10)
    confidence: float = Field(..., ge=0, le=1)

    def render(self) -> str:
        lines = [
            "== REALITY AUDIT ==",
            f"Detected: {self.excuse_description} (confidence {self.confidence:.2f})",
            f'User claim: "{self.original_claim}"',
            f"Identity tier: {self.identity_label} | challenge intensity {self.challenge_intensity}/10",
            "",
            "### RESPONSE STRUCTURE (in this order):",
        ]
        for step in self.steps:
            lines.append(f"{step.order}. {step.instruction}")
        lines.append("")
        lines.append("### FORBIDDEN PHRASES:")
        lines.extend(f'- "{phrase}"' for phrase in self.forbidden_phrases)
        lines.append("")
        lines.append(f"### BOUNCE-BACK RULE: {self.bounce_back_rule}")
        return "\n".join(lines)
