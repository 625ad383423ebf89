import json

from ares.config import settings
from ares.patterns import clear_cache, load_pattern_table, load_topic_graph
from ares.schemas.topic import TopicCategory
from ares.services.topic_classifier import TopicClassifier


def test_packaged_tables_are_versioned():
    for name in ("topic_keywords", "shift_phrases", "narrative"):
        table = load_pattern_table(name)
        assert table.name == name
        assert table.version
    graph = load_topic_graph()
    assert set(graph.connections) == {c.value for c in TopicCategory}

def test_pattern_dir_overrides_packaged_table(tmp_path, monkeypatch):
    override = {
        "name": "topic_keywords",
        "version": "test-override",
        "entries": {"sleep": ["zzz"]},
    }
    (tmp_path / "topic_keywords.json").write_text(json.dumps(override), encoding="utf-8")
    monkeypatch.setattr(settings, "pattern_dir", str(tmp_path))
    clear_cache()
    try:
        classifier = TopicClassifier()
        assert classifier.version == "test-override"
        assert classifier.classify("zzz all night").category == TopicCategory.SLEEP
        assert classifier.classify("my deadlift workout").category == TopicCategory.GENERAL
    finally:
        monkeypatch.undo()
        clear_cache()
