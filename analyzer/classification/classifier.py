"""Page type classifier.

Deterministic: the same PageData always yields the same PageTypeResult.
When no candidate clears MIN_CONFIDENCE the explicit ``other`` type is
returned with ``is_fallback`` set; classification never raises.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache

import structlog
from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from analyzer.classification.page_types import (
    MIN_CONFIDENCE,
    OTHER_DEFINITION,
    PAGE_TYPES,
    PageType,
    PageTypeDefinition,
    Signal,
    SignalKind,
)
from analyzer.extraction.page_data import PageData

logger = structlog.get_logger(__name__)

MAX_ALTERNATIVES = 3


@dataclass(frozen=True)
class SignalMatch:
    kind: str
    matcher: str
    weight: int

    def to_dict(self) -> dict:
        return {"kind": self.kind, "matcher": self.matcher, "weight": self.weight}


@dataclass(frozen=True)
class Alternative:
    type: PageType
    name: str
    score: int
    confidence: int

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "name": self.name,
            "score": self.score,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class PageTypeResult:
    """Classified page type."""

    type: PageType
    name: str
    confidence: int  # 0-100
    score: int
    threshold: int
    matched_signals: tuple[SignalMatch, ...] = ()
    alternatives: tuple[Alternative, ...] = field(default_factory=tuple)
    is_fallback: bool = False

    @property
    def meets_threshold(self) -> bool:
        return self.score >= self.threshold

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "name": self.name,
            "confidence": self.confidence,
            "score": self.score,
            "threshold": self.threshold,
            "matched_signals": [match.to_dict() for match in self.matched_signals],
            "alternatives": [alt.to_dict() for alt in self.alternatives],
            "is_fallback": self.is_fallback,
        }


def confidence_for(score: int, threshold: int) -> int:
    """Raw score as a percentage of the pass threshold, capped at 100."""
    if threshold <= 0:
        return 0
    return min(100, round(score / threshold * 100))


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.I)


def fallback_result() -> PageTypeResult:
    return PageTypeResult(
        type=PageType.OTHER,
        name=OTHER_DEFINITION.name,
        confidence=0,
        score=0,
        threshold=OTHER_DEFINITION.threshold,
        is_fallback=True,
    )


class PageTypeClassifier:
    """Scores a page against every registered page type."""

    def __init__(self, registry: dict[PageType, PageTypeDefinition] | None = None):
        self.registry = registry or PAGE_TYPES

    def classify(self, page: PageData) -> PageTypeResult:
        """
        Classify ``page``.

        Candidates scoring below MIN_CONFIDENCE are dropped. The rest are
        ordered by score, then by the type's priority.
        """
        soup = BeautifulSoup(page.markup, "html.parser") if page.markup else None
        schema_types = [t.lower() for t in page.schema_types]

        candidates: list[tuple[PageType, PageTypeDefinition, int, list[SignalMatch]]] = []
        for page_type, definition in self.registry.items():
            matches = [
                SignalMatch(kind=signal.kind.value, matcher=signal.matcher, weight=signal.weight)
                for signal in definition.signals
                if self._matches(signal, page, soup, schema_types)
            ]
            score = sum(match.weight for match in matches)
            if score >= MIN_CONFIDENCE:
                candidates.append((page_type, definition, score, matches))

        if not candidates:
            logger.debug("page_type_fallback", url=page.url)
            return fallback_result()

        candidates.sort(key=lambda c: (c[2], c[1].priority), reverse=True)
        best_type, best, best_score, best_matches = candidates[0]

        result = PageTypeResult(
            type=best_type,
            name=best.name,
            confidence=confidence_for(best_score, best.threshold),
            score=best_score,
            threshold=best.threshold,
            matched_signals=tuple(best_matches),
            alternatives=tuple(
                Alternative(
                    type=page_type,
                    name=definition.name,
                    score=score,
                    confidence=confidence_for(score, definition.threshold),
                )
                for page_type, definition, score, _ in candidates[1 : 1 + MAX_ALTERNATIVES]
            ),
        )

        logger.info(
            "page_classified",
            url=page.url,
            page_type=result.type.value,
            confidence=result.confidence,
            score=result.score,
        )
        return result

    def _matches(
        self,
        signal: Signal,
        page: PageData,
        soup: BeautifulSoup | None,
        schema_types: list[str],
    ) -> bool:
        if signal.kind is SignalKind.SCHEMA:
            wanted = signal.matcher.lower()
            return any(t == wanted or wanted in t for t in schema_types)

        if signal.kind is SignalKind.SELECTOR:
            if soup is None:
                return False
            try:
                return len(soup.select(signal.matcher)) >= signal.min_count
            except SelectorSyntaxError:
                logger.warning("invalid_signal_selector", selector=signal.matcher)
                return False

        if signal.kind is SignalKind.PATTERN:
            haystack = page.markup if signal.target == "markup" else page.text
            return bool(_compile(signal.matcher).search(haystack))

        if signal.kind is SignalKind.URL:
            return bool(_compile(signal.matcher).search(page.path))

        return False


def classify_page(page: PageData) -> PageTypeResult:
    """Convenience function to classify a page with the default registry."""
    return PageTypeClassifier().classify(page)
