from datetime import datetime, timedelta
from ares.schemas.topic import Topic, TopicCategory, TopicState, TopicStatus

# one short utterance per category, each hitting a single keyword table
CATEGORY_UTTERANCES = {
    TopicCategory.TRAINING: "my deadlift workout",
    TopicCategory.NUTRITION: "protein and calorie intake",
    TopicCategory.SUPPLEMENTS: "creatine or magnesium",
    TopicCategory.SLEEP: "my bedtime and melatonin",
    TopicCategory.HORMONES: "cortisol and testosterone levels",
    TopicCategory.BLOODWORK: "ferritin and cholesterol",
}


def make_topic(
    category: TopicCategory,
    name: str,
    status: TopicStatus,
    at: datetime,
    depth: float = 0.0,
    minutes_ago: int = 0,
) -> Topic:
    ts = at - timedelta(minutes=minutes_ago)
    return Topic(name=name, category=category, status=status, depth=depth, started_at=ts, last_active_at=ts)


def active_count(state: TopicState) -> int:
    return sum(1 for t in state.all_topics() if t.status == TopicStatus.ACTIVE)
