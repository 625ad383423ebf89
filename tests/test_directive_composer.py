from ares.schemas.identity import ProtocolMode
from ares.schemas.narrative import NarrativeAnalysis
from ares.services.directive_composer import FORBIDDEN_PHRASES, compose_directive
from ares.services.identity_resolver import resolve_identity
from ares.services.narrative_classifier import detect_narrative


def test_no_directive_without_excuse():
    identity = resolve_identity("natural")
    assert compose_directive(None, identity) is None
    assert compose_directive(NarrativeAnalysis(is_venting=True, confidence=0.7), identity) is None
    assert compose_directive(NarrativeAnalysis(is_honest_admission=True, confidence=0.8), identity) is None

def test_directive_structure():
    analysis = detect_narrative("I couldn't train because work was insane")
    identity = resolve_identity("enhanced")
    directive = compose_directive(analysis, identity, deviation="2 of 4 planned sessions missed")

    assert [s.kind for s in directive.steps] == [
        "name_deviation",
        "challenge_narrative",
        "identity_reference",
        "process_fix",
        "warm_close",
    ]
    assert [s.order for s in directive.steps] == [1, 2, 3, 4, 5]
    assert "2 of 4 planned sessions missed" in directive.steps[0].instruction
    assert '"work"' in directive.steps[1].instruction
    assert "Your Enhanced standard is incompatible with 2 of 4 planned sessions missed" in directive.steps[2].instruction
    assert directive.forbidden_phrases == FORBIDDEN_PHRASES
    assert directive.bounce_back_rule
    assert directive.protocol_mode == ProtocolMode.ASSISTED
    assert directive.challenge_intensity == identity.challenge_baseline

def test_high_confidence_raises_intensity():
    analysis = NarrativeAnalysis(detected=True, excuse_type="excuse_energy", original_claim="tired", confidence=0.9)
    identity = resolve_identity("enhanced,clinical")
    directive = compose_directive(analysis, identity)
    assert directive.challenge_intensity == min(10, identity.challenge_baseline + 1)

def test_render_is_an_instruction_block():
    analysis = detect_narrative("I couldn't train because work was insane")
    rendered = compose_directive(analysis, resolve_identity(None)).render()
    assert rendered.startswith("== REALITY AUDIT ==")
    assert "FORBIDDEN PHRASES" in rendered
    assert "BOUNCE-BACK RULE" in rendered
    assert "External blame" in rendered
