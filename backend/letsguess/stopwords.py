"""Стоп-лист: частые слова, которые никогда не скрываются."""
import json
from functools import lru_cache
from importlib import resources


@lru_cache
def load_stopwords() -> frozenset[str]:
    raw = resources.files("letsguess").joinpath("data/stopwords-en.json").read_text(encoding="utf-8")
    return frozenset(w.lower() for w in json.loads(raw))
