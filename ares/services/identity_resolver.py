"""
Identity resolver: protocol-mode string from the user profile -> identity tier.
"""

import logging
import re
from typing import Awaitable, Callable, Optional

from ares.identity.library import (
    ASSISTED_TOKENS,
    COMBINED_TOKENS,
    DEFAULT_MODE,
    IDENTITY_TIERS,
    SUPERVISED_TOKENS,
)
from ares.schemas.identity import IdentityContext, ProtocolMode

logger = logging.getLogger("ares")

TOKEN_SPLIT_RE = re.compile(r"[^a-z]+")


def normalize_protocol_mode(mode: Optional[str]) -> ProtocolMode:
    """
    Map a free-form mode string onto a tier. Tokens are split on any
    non-letter separator ("enhanced,clinical", "enhanced + clinical").
    Token order is irrelevant; anything unrecognized is BASELINE.
    """
    if not isinstance(mode, str):
        return DEFAULT_MODE

    tokens = {t for t in TOKEN_SPLIT_RE.split(mode.lower()) if t}
    if not tokens:
        return DEFAULT_MODE

    if tokens & ASSISTED_TOKENS and tokens & SUPERVISED_TOKENS:
        return ProtocolMode.COMBINED
    if len(tokens) == 1:
        token = next(iter(tokens))
        if token in SUPERVISED_TOKENS:
            return ProtocolMode.SUPERVISED
        if token in ASSISTED_TOKENS:
            return ProtocolMode.ASSISTED
        if token in COMBINED_TOKENS:
            return ProtocolMode.COMBINED
    return DEFAULT_MODE


def resolve_identity(mode: Optional[str]) -> IdentityContext:
    return IDENTITY_TIERS[normalize_protocol_mode(mode)]


async def resolve_identity_safely(fetch_mode: Callable[[], Awaitable[Optional[str]]]) -> IdentityContext:
    """
    Resolve the tier from an upstream profile fetch.
    A failing fetch counts as "mode absent" so it never blocks the turn.
    """
    try:
        mode = await fetch_mode()
    except Exception as e:
        logger.warning("profile_fetch_failed", extra={"error": repr(e), "fallback": DEFAULT_MODE.value})
        mode = None
    return resolve_identity(mode)
