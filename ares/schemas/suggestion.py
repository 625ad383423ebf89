from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from ares.schemas.topic import TopicCategory

Priority = Literal["high", "medium", "low"]
TimeContext = Literal["just now", "a few minutes ago", "earlier"]


class UserGoals(BaseModel):
    primary: Optional[str] = None
    secondary: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)


class ProactiveSuggestion(BaseModel):
    current_topic: TopicCategory
    next_topic: TopicCategory
    transition: str
    priority: Priority
    reason: str

    def render(self, depth: float = 0.0) -> str:
        # low priority only surfaces once the current topic has some depth
        if self.priority == "low" and depth < 1:
            return ""

        lines = [
            "== PROACTIVE CONVERSATION IMPULSE ==",
            f"Current topic: {self.current_topic.value}",
            f"Suggested next topic: {self.next_topic.value}",
            "",
            "### INSTRUCTION:",
        ]
        if self.priority == "high":
            lines.append(f'Gently steer toward "{self.next_topic.value}" at the end of your answer.')
            lines.append(f'Example transition: "{self.transition}"')
        else:
            lines.append(f'OPTIONAL: mention "{self.next_topic.value}" only if it fits naturally.')
            lines.append("Do NOT force it.")
        lines.append("")
        lines.append("LIMIT: at most one proactive suggestion per answer.")
        return "\n".join(lines)


class ResurfaceCue(BaseModel):
    """Hint for bringing a paused topic back into the conversation."""
    topic_id: str
    topic_name: str
    category: TopicCategory
    paused_minutes: int
    time_context: TimeContext
    phrase: str
