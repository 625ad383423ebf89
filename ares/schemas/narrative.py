from pydantic import BaseModel, Field
from typing import Literal, Optional

ExcuseType = Literal[
    "excuse_time",       # "no time", "didn't get to it"
    "excuse_energy",     # "tired", "exhausted"
    "excuse_emotional",  # "needed that", "comfort food"
    "excuse_external",   # "boss", "partner", "weather"
    "rationalization",   # "it's fine once in a while"
]


class NarrativeAnalysis(BaseModel):
    detected: bool = Field(False, description="True only for an excuse; this is the escalation trigger.")
    is_venting: bool = False
    is_honest_admission: bool = False
    excuse_type: Optional[ExcuseType] = None
    original_claim: str = ""
    confidence: float = Field(0.0, ge=0, le=1)
