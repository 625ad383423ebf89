"""
Directive composer: turns a detected excuse into an ordered correction template.
The generator phrases it; nothing here is shown to the user verbatim.
"""

import logging
from typing import List, Optional

from ares.schemas.directive import Directive, DirectiveStep
from ares.schemas.identity import IdentityContext
from ares.schemas.narrative import NarrativeAnalysis
from ares.services.narrative_classifier import describe_excuse_type

logger = logging.getLogger("ares")

# empathic deflections that would undo the challenge and identity steps
FORBIDDEN_PHRASES: List[str] = [
    "I understand",
    "That's totally okay",
    "Don't be so hard on yourself",
    "It happens to everyone",
    "No worries",
    "Life happens",
    "You deserve a break",
    "That's understandable",
    "One bad day doesn't matter",
]

BOUNCE_BACK_RULE = (
    "Return to your normal warm, encouraging tone immediately after the correction. "
    "No lingering disappointment, no repeating the critique in later turns."
)

HIGH_CONFIDENCE = 0.9
MAX_INTENSITY = 10


def compose_directive(
    analysis: Optional[NarrativeAnalysis],
    identity: IdentityContext,
    deviation: Optional[str] = None,
) -> Optional[Directive]:
    """Build the correction template. Returns None unless an excuse was detected."""
    if analysis is None or not analysis.detected or analysis.excuse_type is None:
        return None

    claim = analysis.original_claim or "the stated reason"
    behavior = deviation or "letting the plan slide"
    intensity = identity.challenge_baseline
    if analysis.confidence >= HIGH_CONFIDENCE:
        intensity = min(MAX_INTENSITY, intensity + 1)

    if deviation:
        name_step = f"Name the concrete, measurable deviation: {deviation}. State it as a fact, without judgement."
    else:
        name_step = "Name the concrete, measurable deviation from the plan (what was missed, by how much). State it as a fact."

    steps = [
        DirectiveStep(order=1, kind="name_deviation", instruction=name_step),
        DirectiveStep(
            order=2,
            kind="challenge_narrative",
            instruction=(
                f'Challenge the narrative "{claim}" with facts ({describe_excuse_type(analysis.excuse_type)}). '
                "Do not validate the reason yet."
            ),
        ),
        DirectiveStep(
            order=3,
            kind="identity_reference",
            instruction=f'Reference the identity tier explicitly: "{identity.identity_line(behavior)}"',
        ),
        DirectiveStep(
            order=4,
            kind="process_fix",
            instruction="Ask for the process-level fix for next time (when, where, what changes), not a promise to try harder.",
        ),
        DirectiveStep(
            order=5,
            kind="warm_close",
            instruction="Close warmly with one short encouraging remark.",
        ),
    ]

    logger.debug(
        "directive_composed",
        extra={"excuse_type": analysis.excuse_type, "protocol_mode": identity.protocol_mode.value, "intensity": intensity},
    )

    return Directive(
        steps=steps,
        forbidden_phrases=list(FORBIDDEN_PHRASES),
        bounce_back_rule=BOUNCE_BACK_RULE,
        excuse_type=analysis.excuse_type,
        excuse_description=describe_excuse_type(analysis.excuse_type),
        original_claim=claim,
        deviation=deviation,
        protocol_mode=identity.protocol_mode,
        identity_label=identity.label,
        challenge_intensity=intensity,
        confidence=analysis.confidence,
    )
