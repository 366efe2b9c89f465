"""Lookup tables for query building and filtering."""

from dataclasses import dataclass, field
from importlib import resources
from typing import Any, Optional

import yaml


@dataclass(frozen=True)
class Vocabulary:
    """Static term tables loaded from YAML."""

    default_keywords: tuple[str, ...] = ()
    negative_query_terms: tuple[str, ...] = ()
    block_terms: tuple[str, ...] = ()
    beauty_categories: frozenset[str] = frozenset()
    beauty_terms: tuple[str, ...] = ()
    synonyms: dict[str, tuple[str, ...]] = field(default_factory=dict)
    keyword_expansions: dict[str, tuple[str, ...]] = field(default_factory=dict)

    def expansions_for(self, keyword: str) -> tuple[str, ...]:
        """Terms that count as a match for keyword.

        Raises:
            KeyError: When the keyword has no expansion entry
        """
        return self.keyword_expansions[keyword]

    def first_synonym(self, keyword: str) -> Optional[str]:
        synonyms = self.synonyms.get(keyword) or ()
        return synonyms[0] if synonyms else None

    def is_beauty_category(self, keyword: str) -> bool:
        return keyword in self.beauty_categories

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Vocabulary":
        return cls(
            default_keywords=tuple(data.get("default_keywords") or ()),
            negative_query_terms=tuple(data.get("negative_query_terms") or ()),
            block_terms=tuple(data.get("block_terms") or ()),
            beauty_categories=frozenset(data.get("beauty_categories") or ()),
            beauty_terms=tuple(data.get("beauty_terms") or ()),
            synonyms={k: tuple(v or ()) for k, v in (data.get("synonyms") or {}).items()},
            keyword_expansions={
                k: tuple(v or ()) for k, v in (data.get("keyword_expansions") or {}).items()
            },
        )


def _load_default_data() -> dict[str, Any]:
    text = resources.files("news_monitor.data").joinpath("vocabulary.yaml").read_text(encoding="utf-8")
    return yaml.safe_load(text) or {}


def load_vocabulary(overrides: Optional[dict[str, Any]] = None) -> Vocabulary:
    """Load bundled tables, replacing any section present in overrides."""
    data = _load_default_data()
    if overrides:
        data.update(overrides)
    return Vocabulary.from_dict(data)
