from enum import Enum
from pydantic import BaseModel, Field


class ProtocolMode(str, Enum):
    """Self-declared intervention level of the user."""
    BASELINE = "baseline"
    ASSISTED = "assisted"
    SUPERVISED = "supervised"
    COMBINED = "combined"


class IdentityContext(BaseModel):
    protocol_mode: ProtocolMode
    label: str
    description: str
    challenge_baseline: int = Field(..., ge=1, le=10, description="Default correction strictness 1-10.")
    directive_fragment: str = Field(..., description="Template with {label} and {behavior} placeholders.")

    model_config = {"frozen": True}

    def identity_line(self, behavior: str) -> str:
        return self.directive_fragment.format(label=self.label, behavior=behavior)
