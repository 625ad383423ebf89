"""
ARES Dialogue Engine - Configuration
Runtime settings for the turn engine, the session store and the pattern tables.
"""

import logging
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ==========================================
    # CORE SETTINGS
    # ==========================================
    env: str = "dev"  # dev | prod
    db_url: str = "sqlite+aiosqlite:///./ares.db"
    log_level: str = "INFO"

    # ==========================================
    # PATTERN TABLES
    # ==========================================

    # Directory holding edited copies of the packaged pattern tables.
    # A file found here replaces the packaged file of the same name.
    pattern_dir: Optional[str] = None

    # ==========================================
    # TURN ENGINE
    # ==========================================

    # Excuses below this confidence are classified but not escalated
    escalation_min_confidence: float = 0.0
    suggestions_enabled: bool = True
    resurface_enabled: bool = True

    class Config:
        env_file = ".env"
        env_prefix = "ARES_"


settings = Settings()


def configure_logging() -> None:
    """Attach a stream handler to the "ares" logger at the configured level."""
    logger = logging.getLogger("ares")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(settings.log_level.upper())
