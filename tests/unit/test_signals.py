"""Tests for content signal patterns and composite analyses."""

from datetime import UTC, datetime, timedelta

import pytest

from analyzer.extraction.content import ListBlock, TableBlock
from analyzer.signals.content import (
    DateSource,
    FreshnessStatus,
    analyze_depth,
    analyze_freshness,
    analyze_listicle,
    analyze_original_research,
    analyze_tables,
    chunk_content,
    freshness_tier,
)
from analyzer.signals.patterns import (
    analyze_eeat,
    count_citations,
    count_statistics,
    extract_dates,
    fact_density,
    find_quotable_sentences,
    find_uncitable_content,
)

NOW = datetime(2025, 6, 1, tzinfo=UTC)


class TestPatternCounts:
    """Tests for statistic and citation pattern families."""

    def test_statistics(self) -> None:
        text = "Sales grew 45% to $1,200 in 2024, about 3 weeks faster, rated 4.5/5."
        assert count_statistics(text) >= 5

    def test_no_statistics(self) -> None:
        assert count_statistics("Plain words without any numbers at all.") == 0

    def test_citations(self) -> None:
        text = (
            "According to Harvard Business Review, "
            '"customers value speed above almost everything else."'
        )
        assert count_citations(text) >= 2

    def test_fact_density(self) -> None:
        assert fact_density("10% of 20 users", word_count=100) == 1.0
        assert fact_density("", word_count=0) == 0.0


class TestQuotableSentences:
    """Tests for quotable sentence detection."""

    def test_length_window(self) -> None:
        short = "Prices rose 45%."
        long = "Prices rose 45% " + "and kept rising " * 15 + "."
        good = "Prices for espresso grinders rose 45% in the first quarter."
        quotable = find_quotable_sentences(f"{short} {long} {good}")

        assert [q.text for q in quotable] == [good]
        assert 8 <= quotable[0].word_count <= 40
        assert "Contains statistic" in quotable[0].reasons

    def test_requires_a_criterion(self) -> None:
        text = "This sentence has enough words but nothing that makes it worth quoting at all."
        assert find_quotable_sentences(text) == []

    def test_ranked_by_reasons(self) -> None:
        one = "The grinder weighs a lot more than other models on the market."
        two = "According to Barista Labs the grinder retains 2 g versus 8 g for rival models."
        quotable = find_quotable_sentences(f"{one} {two}")
        assert quotable[0].text == two
        assert quotable[0].score > 1


class TestEEATAndVagueContent:
    def test_eeat_categories(self) -> None:
        text = "I tested this for 6 months of use. Certified barista with 10 years of experience."
        breakdown = analyze_eeat(text)
        assert breakdown.experience.count >= 1
        assert breakdown.expertise.count >= 2
        assert breakdown.total == (
            breakdown.experience.count
            + breakdown.expertise.count
            + breakdown.authority.count
            + breakdown.trust.count
        )

    def test_uncitable_deduplicated(self) -> None:
        text = "The best grinder. THE BEST grinder. A revolutionary design. Act now!"
        phrases = find_uncitable_content(text)
        lowered = [p.lower() for p in phrases]
        assert len(lowered) == len(set(lowered))
        assert "revolutionary" in lowered
        assert "act now" in lowered


class TestExtractDates:
    def test_formats_and_ordering(self) -> None:
        text = "Updated 2025-03-10. First published March 5, 2024 and revised 12 January 2025."
        assert extract_dates(text) == [
            datetime(2024, 3, 5, tzinfo=UTC),
            datetime(2025, 1, 12, tzinfo=UTC),
            datetime(2025, 3, 10, tzinfo=UTC),
        ]

    def test_invalid_calendar_date_ignored(self) -> None:
        assert extract_dates("Due 2025-02-30.") == []


class TestDepth:
    @pytest.mark.parametrize(
        "words,status,points",
        [
            (2600, "comprehensive", 25),
            (2400, "thorough", 22),
            (1600, "substantial", 18),
            (1000, "moderate", 12),
            (600, "brief", 6),
            (100, "thin", 2),
        ],
    )
    def test_tiers(self, words: int, status: str, points: int) -> None:
        depth = analyze_depth(words)
        assert depth.status == status
        assert depth.points == points

    def test_recommendation_below_optimal(self) -> None:
        assert analyze_depth(1500).recommendation is not None
        assert analyze_depth(2000).recommendation is None


class TestContentQualityScenario:
    """2400 words, 3 lists with 14 items, no tables and no citations."""

    def test_scenario(self) -> None:
        lists = [
            ListBlock(kind="ul", items=tuple(f"item {i}" for i in range(5))),
            ListBlock(kind="ol", items=tuple(f"step {i}" for i in range(5))),
            ListBlock(kind="ul", items=tuple(f"tip {i}" for i in range(4))),
        ]
        text = "We tested grinders. " + "plain filler words " * 10

        assert analyze_depth(2400).status == "thorough"
        assert analyze_listicle(lists).points == 20
        assert analyze_tables([], text).points == 0
        assert count_citations(text) == 0
        assert analyze_original_research(text).points < 20


class TestListicleAndTables:
    def test_single_short_list(self) -> None:
        result = analyze_listicle([ListBlock(kind="ul", items=("a", "b"))])
        assert result.points == 5
        assert result.recommendation is not None

    def test_numbered_paragraphs(self) -> None:
        paragraphs = ["1. Grind", "2. Tamp", "3. Pull the shot"]
        assert analyze_listicle([], paragraphs).points == 3

    def test_quality_tables(self) -> None:
        table = TableBlock(rows=(("a", "b"), ("1", "2"), ("3", "4")), has_header=True)
        assert analyze_tables([table], "").points == 15
        assert analyze_tables([table, table], "").points == 20

    def test_comparison_wording_without_table(self) -> None:
        result = analyze_tables([], "Aero versus Bolt")
        assert result.points == 3
        assert "table" in result.recommendation


class TestFreshness:
    """Tests for freshness tiers and source priority."""

    def test_tiers_non_increasing(self) -> None:
        points = [freshness_tier(days)[1] for days in range(0, 400, 5)]
        assert points == sorted(points, reverse=True)

    @pytest.mark.parametrize(
        "days,status",
        [
            (0, FreshnessStatus.FRESH),
            (29, FreshnessStatus.FRESH),
            (30, FreshnessStatus.RECENT),
            (120, FreshnessStatus.AGING),
            (365, FreshnessStatus.STALE),
        ],
    )
    def test_tier_boundaries(self, days: int, status: FreshnessStatus) -> None:
        assert freshness_tier(days)[0] == status

    def test_modified_beats_published(self) -> None:
        modified = NOW - timedelta(days=10)
        published = NOW - timedelta(days=400)
        result = analyze_freshness(modified, published, "", NOW)
        assert result.date_source == DateSource.MODIFIED_METADATA
        assert result.status == FreshnessStatus.FRESH
        assert result.days_since_update == 10

    def test_modified_beats_older_content_date(self) -> None:
        modified = NOW - timedelta(days=10)
        result = analyze_freshness(modified, None, "Published 2023-01-05.", NOW)
        assert result.date_source == DateSource.MODIFIED_METADATA
        assert result.days_since_update == 10
        assert result.status == FreshnessStatus.FRESH

    def test_published_beats_content(self) -> None:
        published = NOW - timedelta(days=100)
        result = analyze_freshness(None, published, "Written 2025-05-30.", NOW)
        assert result.date_source == DateSource.PUBLISHED_METADATA
        assert result.status == FreshnessStatus.AGING

    def test_content_date_fallback(self) -> None:
        result = analyze_freshness(None, None, "Last reviewed 2025-05-20.", NOW)
        assert result.date_source == DateSource.CONTENT
        assert result.days_since_update == 12

    def test_unknown(self) -> None:
        result = analyze_freshness(None, None, "No dates here.", NOW)
        assert result.status == FreshnessStatus.UNKNOWN
        assert result.points == 0
        assert result.recommendation is not None


class TestChunkContent:
    def test_chunks_respect_sentence_boundaries(self) -> None:
        sentence = "The grinder retains 0.2 g of coffee between doses in our testing. "
        chunks = chunk_content(sentence * 40, target_tokens=50)

        assert len(chunks) > 1
        assert all(chunk.text.endswith(".") for chunk in chunks)
        assert chunks[0].has_statistic is True
        assert 0 <= chunks[0].citability_score <= 100

    def test_limit(self) -> None:
        chunks = chunk_content("Short sentence here. " * 500, target_tokens=10, limit=3)
        assert len(chunks) == 3

    def test_empty(self) -> None:
        assert chunk_content("") == []
