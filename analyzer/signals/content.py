"""Composite content analyses: depth, listicle and table structure,
original research, freshness and citation-ready chunks."""

import math
import re
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from analyzer.extraction.content import ListBlock, TableBlock
from analyzer.signals.patterns import (
    CITATION_PATTERNS,
    SENTENCE,
    count_original_research,
    count_statistics,
    extract_dates,
)

WORDS_PER_MINUTE = 200
OPTIMAL_WORD_COUNT = 2000

# (minimum words, tier, points)
DEPTH_TIERS: tuple[tuple[int, str, int], ...] = (
    (2500, "comprehensive", 25),
    (2000, "thorough", 22),
    (1500, "substantial", 18),
    (1000, "moderate", 12),
    (500, "brief", 6),
    (0, "thin", 2),
)
DEPTH_MAX = 25

LISTICLE_MAX = 20
TABLES_MAX = 20
RESEARCH_MAX = 20
FRESHNESS_MAX = 15

NUMBERED_LINE = re.compile(r"^\s*\d+[.)]\s+\S")
COMPARISON_WORDING = re.compile(
    r"\bvs\.?\s|versus|compared|comparison|\bpros\b|\bcons\b|advantages|disadvantages", re.I
)

FRESHNESS_BENCHMARK = "76.4% of top-cited pages were updated within 30 days"

# Chunking
CHARS_PER_TOKEN = 4
CHUNK_TARGET_TOKENS = 200
CHUNK_LIMIT = 10
CHUNK_COMPARISON = re.compile(r"\d+\s*(?:x|times)\b|scored\s+\d+|ranked\s+#?\d+", re.I)
CHUNK_FLUFF = re.compile(r"\b(?:really|very|amazing|great|super|awesome)\b", re.I)


@dataclass
class DepthAnalysis:
    word_count: int
    status: str
    points: int
    reading_time_minutes: int
    max_points: int = DEPTH_MAX
    recommendation: str | None = None

    def to_dict(self) -> dict:
        return {
            "word_count": self.word_count,
            "status": self.status,
            "points": self.points,
            "max_points": self.max_points,
            "reading_time_minutes": self.reading_time_minutes,
            "recommendation": self.recommendation,
        }


def analyze_depth(word_count: int) -> DepthAnalysis:
    """Length tier of the narrative text."""
    status, points = "thin", 2
    for minimum, tier, tier_points in DEPTH_TIERS:
        if word_count >= minimum:
            status, points = tier, tier_points
            break

    recommendation = None
    if word_count < OPTIMAL_WORD_COUNT:
        recommendation = (
            f"Add {OPTIMAL_WORD_COUNT - word_count} more words to reach optimal citation length"
        )

    return DepthAnalysis(
        word_count=word_count,
        status=status,
        points=points,
        reading_time_minutes=math.ceil(word_count / WORDS_PER_MINUTE),
        recommendation=recommendation,
    )


@dataclass
class ListicleAnalysis:
    list_count: int
    total_items: int
    ordered_lists: int
    numbered_paragraphs: int
    points: int
    max_points: int = LISTICLE_MAX
    recommendation: str | None = None

    def to_dict(self) -> dict:
        return {
            "list_count": self.list_count,
            "total_items": self.total_items,
            "ordered_lists": self.ordered_lists,
            "numbered_paragraphs": self.numbered_paragraphs,
            "points": self.points,
            "max_points": self.max_points,
            "recommendation": self.recommendation,
        }


def analyze_listicle(
    lists: tuple[ListBlock, ...] | list[ListBlock], paragraphs: tuple[str, ...] | list[str] = ()
) -> ListicleAnalysis:
    """List structure: 3+ lists totalling 10+ items earn full points."""
    total_items = sum(len(block.items) for block in lists)
    numbered = sum(1 for paragraph in paragraphs if NUMBERED_LINE.match(paragraph))

    if len(lists) >= 3 and total_items >= 10:
        points = 20
    elif total_items >= 10:
        points = 15
    elif total_items >= 5:
        points = 10
    elif lists:
        points = 5
    elif numbered >= 3:
        points = 3
    else:
        points = 0

    recommendation = None
    if total_items < 10:
        recommendation = "Add structured lists with 10+ items for better citation rates"

    return ListicleAnalysis(
        list_count=len(lists),
        total_items=total_items,
        ordered_lists=sum(1 for block in lists if block.kind == "ol"),
        numbered_paragraphs=numbered,
        points=points,
        recommendation=recommendation,
    )


@dataclass
class TableAnalysis:
    table_count: int
    quality_tables: int
    has_comparison_wording: bool
    points: int
    max_points: int = TABLES_MAX
    recommendation: str | None = None

    def to_dict(self) -> dict:
        return {
            "table_count": self.table_count,
            "quality_tables": self.quality_tables,
            "has_comparison_wording": self.has_comparison_wording,
            "points": self.points,
            "max_points": self.max_points,
            "recommendation": self.recommendation,
        }


def analyze_tables(tables: tuple[TableBlock, ...] | list[TableBlock], text: str) -> TableAnalysis:
    """Tables with at least 3 rows and 2 columns count as quality tables."""
    quality = sum(1 for table in tables if table.row_count >= 3 and table.column_count >= 2)
    comparison = bool(COMPARISON_WORDING.search(text))

    if quality >= 2:
        points = 20
    elif quality == 1:
        points = 15
    elif tables:
        points = 8
    elif comparison:
        points = 3
    else:
        points = 0

    recommendation = None
    if quality == 0:
        recommendation = (
            "Convert comparisons into a table with clear rows and columns"
            if comparison
            else "Add a comparison or specification table to structure key facts"
        )

    return TableAnalysis(
        table_count=len(tables),
        quality_tables=quality,
        has_comparison_wording=comparison,
        points=points,
        recommendation=recommendation,
    )


@dataclass
class ResearchAnalysis:
    original_signals: int
    statistics: int
    points: int
    max_points: int = RESEARCH_MAX
    recommendation: str | None = None

    def to_dict(self) -> dict:
        return {
            "original_signals": self.original_signals,
            "statistics": self.statistics,
            "points": self.points,
            "max_points": self.max_points,
            "recommendation": self.recommendation,
        }


def analyze_original_research(text: str) -> ResearchAnalysis:
    original = count_original_research(text)
    stats = count_statistics(text)

    if original >= 5 and stats >= 10:
        points = 20
    elif original >= 3 and stats >= 5:
        points = 15
    elif original >= 1 and stats >= 3:
        points = 10
    elif stats >= 5:
        points = 8
    elif original >= 1 or stats >= 2:
        points = 5
    else:
        points = 0

    recommendation = None
    if points < 15:
        recommendation = (
            "Publish first-party data: surveys, tests or measurements with sample sizes"
        )

    return ResearchAnalysis(
        original_signals=original,
        statistics=stats,
        points=points,
        recommendation=recommendation,
    )


class FreshnessStatus(StrEnum):
    FRESH = "fresh"
    RECENT = "recent"
    AGING = "aging"
    STALE = "stale"
    UNKNOWN = "unknown"


class DateSource(StrEnum):
    MODIFIED_METADATA = "modified_metadata"
    PUBLISHED_METADATA = "published_metadata"
    CONTENT = "content"


# (maximum age in days, status, points); older than the last entry is stale
FRESHNESS_TIERS: tuple[tuple[int, FreshnessStatus, int], ...] = (
    (30, FreshnessStatus.FRESH, 15),
    (90, FreshnessStatus.RECENT, 10),
    (180, FreshnessStatus.AGING, 5),
)
STALE_POINTS = 2

FRESHNESS_RECOMMENDATIONS = {
    FreshnessStatus.RECENT: (
        'Update content or add "Last reviewed" date to boost freshness signals'
    ),
    FreshnessStatus.AGING: "Content is aging - consider updating with current information",
    FreshnessStatus.STALE: (
        "Content is stale - major update recommended for AI citation eligibility"
    ),
    FreshnessStatus.UNKNOWN: (
        'Add visible "Last updated" date to signal freshness to AI crawlers'
    ),
}


@dataclass
class FreshnessAnalysis:
    status: FreshnessStatus
    points: int
    date: datetime | None = None
    date_source: DateSource | None = None
    days_since_update: int | None = None
    max_points: int = FRESHNESS_MAX
    benchmark: str = FRESHNESS_BENCHMARK
    recommendation: str | None = None

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "points": self.points,
            "max_points": self.max_points,
            "date": self.date.isoformat() if self.date else None,
            "date_source": self.date_source.value if self.date_source else None,
            "days_since_update": self.days_since_update,
            "benchmark": self.benchmark,
            "recommendation": self.recommendation,
        }


def freshness_tier(days: int) -> tuple[FreshnessStatus, int]:
    """Status and points for an age in days; points never increase with age."""
    for max_days, status, points in FRESHNESS_TIERS:
        if days < max_days:
            return status, points
    return FreshnessStatus.STALE, STALE_POINTS


def analyze_freshness(
    date_modified: datetime | None,
    date_published: datetime | None,
    text: str,
    now: datetime,
) -> FreshnessAnalysis:
    """
    Freshness from the first available source, in priority order:
    modification metadata, publication metadata, then the earliest date
    written in the content.
    """
    date: datetime | None = None
    source: DateSource | None = None

    if date_modified is not None:
        date, source = date_modified, DateSource.MODIFIED_METADATA
    elif date_published is not None:
        date, source = date_published, DateSource.PUBLISHED_METADATA
    else:
        content_dates = extract_dates(text)
        if content_dates:
            date, source = content_dates[0], DateSource.CONTENT

    if date is None:
        return FreshnessAnalysis(
            status=FreshnessStatus.UNKNOWN,
            points=0,
            recommendation=FRESHNESS_RECOMMENDATIONS[FreshnessStatus.UNKNOWN],
        )

    days = max(0, (now - date).days)
    status, points = freshness_tier(days)
    return FreshnessAnalysis(
        status=status,
        points=points,
        date=date,
        date_source=source,
        days_since_update=days,
        recommendation=FRESHNESS_RECOMMENDATIONS.get(status),
    )


@dataclass
class ContentChunk:
    index: int
    text: str
    word_count: int
    token_estimate: int
    has_statistic: bool
    has_citation: bool
    citability_score: int

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "text": self.text,
            "word_count": self.word_count,
            "token_estimate": self.token_estimate,
            "has_statistic": self.has_statistic,
            "has_citation": self.has_citation,
            "citability_score": self.citability_score,
        }


def _chunk_score(text: str) -> tuple[bool, bool, int]:
    has_statistic = count_statistics(text) > 0
    has_citation = any(p.search(text) for p in CITATION_PATTERNS.values())
    score = 50
    if has_statistic:
        score += 15
    if has_citation:
        score += 15
    if CHUNK_COMPARISON.search(text):
        score += 10
    if len(CHUNK_FLUFF.findall(text)) > 2:
        score -= 10
    return has_statistic, has_citation, max(0, min(100, score))


def chunk_content(
    text: str,
    target_tokens: int = CHUNK_TARGET_TOKENS,
    limit: int = CHUNK_LIMIT,
) -> list[ContentChunk]:
    """Split text on sentence boundaries into roughly ``target_tokens`` sized chunks."""
    target_chars = target_tokens * CHARS_PER_TOKEN
    sentences = [m.group(0).strip() for m in SENTENCE.finditer(text)] or (
        [text.strip()] if text.strip() else []
    )

    chunks: list[str] = []
    current = ""
    for sentence in sentences:
        if current and len(current) + len(sentence) + 1 > target_chars:
            chunks.append(current)
            current = sentence
        else:
            current = f"{current} {sentence}".strip()
        if len(chunks) >= limit:
            break
    if current and len(chunks) < limit:
        chunks.append(current)

    results = []
    for index, chunk in enumerate(chunks[:limit]):
        has_statistic, has_citation, score = _chunk_score(chunk)
        results.append(
            ContentChunk(
                index=index,
                text=chunk,
                word_count=len(chunk.split()),
                token_estimate=math.ceil(len(chunk) / CHARS_PER_TOKEN),
                has_statistic=has_statistic,
                has_citation=has_citation,
                citability_score=score,
            )
        )
    return results
