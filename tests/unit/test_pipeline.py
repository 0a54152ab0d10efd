"""Tests for the end-to-end analysis pipeline."""

from datetime import datetime

import pytest

from analyzer.pipeline import (
    AnalysisPipeline,
    compute_overall_score,
    grade_for,
    page_content_preview,
    score_page,
)
from analyzer.scoring.geo import GEO_MAX_SCORE
from api.config import get_settings
from api.exceptions import AcquisitionError
from tests.fixtures import ARTICLE_URL, BARE_HTML, FakeAcquirer, article_page


def make_pipeline(acquirer: FakeAcquirer, now: datetime) -> AnalysisPipeline:
    return AnalysisPipeline(acquirer=acquirer, settings=get_settings(), clock=lambda: now)


class TestGrades:
    @pytest.mark.parametrize(
        "score,grade",
        [
            (100, "A+"),
            (90, "A+"),
            (89, "A"),
            (80, "A"),
            (70, "B"),
            (60, "C"),
            (50, "D"),
            (49, "F"),
            (0, "F"),
        ],
    )
    def test_grade_for(self, score: int, grade: str) -> None:
        assert grade_for(score) == grade


class TestScorePage:
    """Tests for classify-and-score on an extracted page."""

    def test_overall_blends_seo_and_geo(self, now) -> None:
        seo, geo, overall = score_page(article_page(), now)

        expected = round(0.5 * seo.score + 0.5 * (geo.score / GEO_MAX_SCORE * 100))
        assert overall.score == expected
        assert overall.seo == seo.score
        assert overall.geo == geo.score
        assert overall.grade == grade_for(overall.score)

    def test_article_classified(self, now) -> None:
        _, geo, _ = score_page(article_page(), now)
        assert geo.page_type.type == "article"

    def test_overall_to_dict(self, now) -> None:
        seo, geo, _ = score_page(article_page(), now)
        data = compute_overall_score(seo, geo).to_dict()
        assert set(data) == {"score", "grade", "breakdown"}
        assert data["breakdown"] == {"seo": seo.score, "geo": geo.score}


class TestAnalysisPipeline:
    """Tests for AnalysisPipeline.analyze."""

    @pytest.mark.asyncio
    async def test_full_report(self, now) -> None:
        acquirer = FakeAcquirer()
        report = await make_pipeline(acquirer, now).analyze(ARTICLE_URL)

        assert acquirer.calls == [ARTICLE_URL]
        assert report.url == ARTICLE_URL
        assert report.analyzed_at == now
        assert 0 <= report.overall_score.score <= 100
        assert 0 <= report.seo.score <= 100
        assert 0 <= report.geo.score <= GEO_MAX_SCORE
        assert report.page_content["word_count"] > 0
        assert report.page_content["load_time_ms"] == 640

    @pytest.mark.asyncio
    async def test_report_dict(self, now) -> None:
        report = await make_pipeline(FakeAcquirer(), now).analyze(ARTICLE_URL)
        data = report.to_dict()

        assert data["id"] == report.id
        assert data["analyzed_at"] == now.isoformat()
        assert data["overall_score"]["grade"] == report.overall_score.grade
        assert data["geo"]["max_score"] == GEO_MAX_SCORE
        assert "page_content" in data

    @pytest.mark.asyncio
    async def test_without_content(self, now) -> None:
        pipeline = make_pipeline(FakeAcquirer(), now)
        report = await pipeline.analyze(ARTICLE_URL, include_content=False)
        assert report.page_content is None
        assert "page_content" not in report.to_dict()

    @pytest.mark.asyncio
    async def test_bare_page_still_reports(self, now) -> None:
        report = await make_pipeline(FakeAcquirer(BARE_HTML), now).analyze(ARTICLE_URL)
        assert report.geo.page_type.is_fallback is True
        assert report.overall_score.grade in {"D", "F"}

    @pytest.mark.asyncio
    async def test_acquisition_error_propagates(self, now) -> None:
        error = AcquisitionError(ARTICLE_URL, "timeout")
        pipeline = make_pipeline(FakeAcquirer(error=error), now)

        with pytest.raises(AcquisitionError) as exc_info:
            await pipeline.analyze(ARTICLE_URL)
        assert exc_info.value.reason == "timeout"
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_unique_report_ids(self, now) -> None:
        pipeline = make_pipeline(FakeAcquirer(), now)
        first = await pipeline.analyze(ARTICLE_URL)
        second = await pipeline.analyze(ARTICLE_URL)
        assert first.id != second.id


class TestPageContentPreview:
    def test_fields(self) -> None:
        preview = page_content_preview(article_page())

        assert preview["title"] == "Best Espresso Grinders Tested: 2025 Buying Guide"
        assert preview["headings"]["h1"] == ["Best Espresso Grinders Tested"]
        assert len(preview["quotable_sentences"]) <= 5
        assert preview["chunks"]
        assert preview["text"]
