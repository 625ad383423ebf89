# ares/identity/library.py
from __future__ import annotations

from typing import Dict, FrozenSet

from ares.schemas.identity import IdentityContext, ProtocolMode

# --- Token classes accepted in the profile's protocol_mode string ---
ASSISTED_TOKENS: FrozenSet[str] = frozenset({"assisted", "enhanced"})
SUPERVISED_TOKENS: FrozenSet[str] = frozenset({"supervised", "clinical"})
COMBINED_TOKENS: FrozenSet[str] = frozenset({"combined"})

# --- Library (one card per tier, hand-authored) ---
IDENTITY_TIERS: Dict[ProtocolMode, IdentityContext] = {
    ProtocolMode.BASELINE: IdentityContext(
        protocol_mode=ProtocolMode.BASELINE,
        label="Natural",
        description="Training and eating without pharmacological support. Progress depends entirely on consistency.",
        challenge_baseline=6,
        directive_fragment="Your {label} standard is incompatible with {behavior}: without support, consistency is the only lever you have.",
    ),
    ProtocolMode.ASSISTED: IdentityContext(
        protocol_mode=ProtocolMode.ASSISTED,
        label="Enhanced",
        description="Running an assisted protocol (peptides or similar). The compounds only pay off when training and nutrition are on point.",
        challenge_baseline=8,
        directive_fragment="Your {label} standard is incompatible with {behavior}: the protocol amplifies the work, it does not replace it.",
    ),
    ProtocolMode.SUPERVISED: IdentityContext(
        protocol_mode=ProtocolMode.SUPERVISED,
        label="Clinical",
        description="On a medically supervised protocol (e.g. TRT). Adherence is part of the treatment plan.",
        challenge_baseline=7,
        directive_fragment="Your {label} standard is incompatible with {behavior}: a supervised protocol assumes the basics are handled.",
    ),
    ProtocolMode.COMBINED: IdentityContext(
        protocol_mode=ProtocolMode.COMBINED,
        label="Enhanced + Clinical",
        description="Assisted compounds on top of a supervised protocol. Highest investment, lowest tolerance for drift.",
        challenge_baseline=9,
        directive_fragment="Your {label} standard is incompatible with {behavior}: with this much invested, skipped basics cost the most.",
    ),
}

DEFAULT_MODE = ProtocolMode.BASELINE
