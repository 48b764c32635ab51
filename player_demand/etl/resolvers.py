"""Map provider keywords back to the entity they describe, and classify them."""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, Mapping, Optional

from player_demand.etl.batcher import generate_keywords

logger = logging.getLogger(__name__)

ENTITY = "entity"
MERCH = "merch"

DEFAULT_MERCH_INDICATORS = ("jersey", "shirt", "merchandise", "kit", "boots", "buy")

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_keyword(keyword: str) -> str:
    return _WHITESPACE_RE.sub(" ", (keyword or "").strip()).lower()


def _term_pattern(term: str) -> str:
    return r"\s+".join(re.escape(part) for part in term.split())


class EntityResolver:
    """Base resolver: `resolver(keyword)` returns an entity name or None."""

    def resolve(self, keyword: str) -> Optional[str]:
        raise NotImplementedError

    def __call__(self, keyword: str) -> Optional[str]:
        return self.resolve(keyword)


class ExactMapResolver(EntityResolver):
    """Reverse lookup over keywords whose generation the caller controlled."""

    def __init__(self, mapping: Mapping[str, str]) -> None:
        self._lookup: Dict[str, str] = {normalize_keyword(keyword): entity for keyword, entity in mapping.items()}

    @classmethod
    def from_generated(cls, entities: Iterable[str], terms: Iterable[str]) -> "ExactMapResolver":
        term_list = list(terms)
        mapping: Dict[str, str] = {}
        for entity in entities:
            for keyword in generate_keywords([entity], term_list):
                mapping[keyword] = entity
        return cls(mapping)

    def resolve(self, keyword: str) -> Optional[str]:
        return self._lookup.get(normalize_keyword(keyword))


class PatternResolver(EntityResolver):
    """Capture a leading free-text name followed by a known term.

    Only meant for keyword lists we did not generate ourselves (uploads,
    provider suggestions). When `known_entities` is given the captured name
    must match one of them, case-insensitively, or the keyword is dropped.
    """

    def __init__(self, terms: Iterable[str], known_entities: Optional[Iterable[str]] = None) -> None:
        vocabulary = sorted({term.strip() for term in terms if term and term.strip()}, key=len, reverse=True)
        if not vocabulary:
            raise ValueError("PatternResolver needs at least one term")
        alternation = "|".join(_term_pattern(term) for term in vocabulary)
        self._pattern = re.compile(
            rf"^(?P<name>[^\W\d_][\w\s'.\-]*?)\s+(?:{alternation})(?:\s|$)",
            re.IGNORECASE,
        )
        self._known: Optional[Dict[str, str]] = None
        if known_entities is not None:
            self._known = {normalize_keyword(name): name for name in known_entities}

    def resolve(self, keyword: str) -> Optional[str]:
        match = self._pattern.match((keyword or "").strip())
        if not match:
            return None
        name = _WHITESPACE_RE.sub(" ", match.group("name")).strip()
        if self._known is None:
            return name
        return self._known.get(name.lower())


class TermClassifier:
    """Route a keyword to the merch bucket when it mentions any merch indicator, else to the entity bucket."""

    def __init__(self, merch_terms: Iterable[str] = DEFAULT_MERCH_INDICATORS) -> None:
        words = sorted({term.strip() for term in merch_terms if term and term.strip()}, key=len, reverse=True)
        if words:
            alternation = "|".join(_term_pattern(word) for word in words)
            self._pattern: Optional[re.Pattern] = re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)
        else:
            self._pattern = None

    def __call__(self, keyword: str) -> str:
        if self._pattern is not None and self._pattern.search(keyword or ""):
            return MERCH
        return ENTITY
