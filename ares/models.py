from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from sqlmodel import Field, SQLModel
from sqlalchemy import JSON, Column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserProfile(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    # e.g. "enhanced,clinical" or "enhanced + clinical"; NULL means baseline
    protocol_mode: Optional[str] = None
    goal_keywords: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=_utcnow)

class DialogueSession(SQLModel, table=True):
    session_id: str = Field(primary_key=True)
    user_id: int = Field(foreign_key="userprofile.id", index=True)
    topic_state: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    # bumped on every write; conditional updates reject stale writers
    version: int = 0
    updated_at: datetime = Field(default_factory=_utcnow)
