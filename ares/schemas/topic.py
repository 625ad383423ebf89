"""
Topic tracking schemas.
A session's TopicState is persisted as JSON between turns, so everything here is a pydantic model.
"""

from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, Field


class TopicCategory(str, Enum):
    """Closed set of conversation subjects. Declaration order breaks classifier ties."""
    TRAINING = "training"
    NUTRITION = "nutrition"
    SUPPLEMENTS = "supplements"
    SLEEP = "sleep"
    HORMONES = "hormones"
    BLOODWORK = "bloodwork"
    MINDSET = "mindset"
    RECOVERY = "recovery"
    LIFESTYLE = "lifestyle"
    PROTOCOL = "protocol"
    GENERAL = "general"

    @classmethod
    def parse(cls, value) -> "TopicCategory":
        """Unknown or missing values fall back to GENERAL."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.GENERAL

    @property
    def label(self) -> str:
        return self.value.capitalize()


class TopicStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    RESOLVED = "resolved"
    ARCHIVED = "archived"


ShiftType = Literal["explicit", "implicit", "question", "tangent"]
TransitionReason = Literal["user_initiated", "natural_flow"]


class Topic(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    category: TopicCategory = TopicCategory.GENERAL
    status: TopicStatus = TopicStatus.ACTIVE
    depth: float = Field(0.0, ge=0, le=3, description="Conversation depth, 0-3 in half steps.")
    started_at: datetime
    last_active_at: datetime
    resolved_at: Optional[datetime] = None
    key_points: List[str] = Field(default_factory=list)
    user_questions: List[str] = Field(default_factory=list)
    pending_followups: List[str] = Field(default_factory=list)


class TopicState(BaseModel):
    primary: Optional[Topic] = None
    secondary: List[Topic] = Field(default_factory=list, description="Paused topics, most recent first.")
    archived: List[Topic] = Field(default_factory=list, description="Resolved/archived topics, most recent first.")
    last_shift_at: Optional[datetime] = None
    shift_count: int = 0

    def all_topics(self) -> List[Topic]:
        topics = [self.primary] if self.primary else []
        return topics + self.secondary + self.archived


class ShiftSignal(BaseModel):
    type: ShiftType
    confidence: float = Field(..., ge=0, le=1)
    detected_phrase: Optional[str] = None


class TopicClassification(BaseModel):
    category: TopicCategory
    confidence: float = Field(..., ge=0, le=1)
    matched_keywords: List[str] = Field(default_factory=list)


class TopicTransition(BaseModel):
    from_topic: Optional[Topic] = None
    to_topic: Topic
    reason: TransitionReason
    timestamp: datetime


class TopicUpdate(BaseModel):
    """Outcome of feeding one message through the lifecycle manager."""
    state: TopicState
    transition: Optional[TopicTransition] = None
    shift_signal: Optional[ShiftSignal] = None
    classification: TopicClassification


class TopicContext(BaseModel):
    """What the text generator needs to know about the running topics."""
    primary_name: Optional[str] = None
    primary_depth: float = 0.0
    key_points: List[str] = Field(default_factory=list)
    paused_topics: List[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return self.primary_name is None and not self.paused_topics

    def render(self) -> str:
        if self.is_empty():
            return ""

        lines = ["<current-topic-context>"]
        if self.primary_name:
            lines.append(f"CURRENT TOPIC: {self.primary_name} (depth: {self.primary_depth:g}/3)")
            if self.key_points:
                lines.append(f"Key points: {', '.join(self.key_points)}")
        if self.paused_topics:
            lines.append(f"PAUSED TOPICS: {', '.join(self.paused_topics)}")
            lines.append("Note: come back to paused topics naturally when the moment fits.")
        lines.append("</current-topic-context>")
        return "\n".join(lines)
