"""
Versioned pattern tables.

Keyword, phrase and regex lists live in JSON next to this module so they can be
tuned without touching classifier code. Setting ARES_PATTERN_DIR points the loader
at a directory of edited copies; any file found there wins over the packaged one.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Type, TypeVar

from pydantic import BaseModel, Field

from ares.config import settings

logger = logging.getLogger("ares")

PACKAGE_DIR = Path(__file__).parent

T = TypeVar("T", bound=BaseModel)


class PatternTable(BaseModel):
    """Ordered category -> pattern list mapping. Key order is significant."""
    name: str
    version: str
    entries: Dict[str, List[str]]

    def get(self, key: str) -> List[str]:
        return self.entries.get(key, [])


class TopicConnection(BaseModel):
    related: List[str]
    phrases: List[str] = Field(..., min_length=1)


class TopicGraphTable(BaseModel):
    name: str
    version: str
    connections: Dict[str, TopicConnection]
    resurface_phrases: Dict[str, List[str]]


def _resolve_path(filename: str) -> Path:
    if settings.pattern_dir:
        override = Path(settings.pattern_dir) / filename
        if override.is_file():
            return override
    return PACKAGE_DIR / filename


def _load(filename: str, model: Type[T]) -> T:
    path = _resolve_path(filename)
    with path.open(encoding="utf-8") as fh:
        table = model.model_validate(json.load(fh))
    logger.info("pattern_table_loaded", extra={"table": table.name, "version": table.version, "path": str(path)})
    return table


@lru_cache()
def load_pattern_table(name: str) -> PatternTable:
    """Load `<name>.json` as a PatternTable. Cached per name."""
    return _load(f"{name}.json", PatternTable)


@lru_cache()
def load_topic_graph() -> TopicGraphTable:
    return _load("topic_graph.json", TopicGraphTable)


def clear_cache() -> None:
    """Forget loaded tables so the next lookup re-reads the files."""
    load_pattern_table.cache_clear()
    load_topic_graph.cache_clear()
