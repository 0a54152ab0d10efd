"""
End-to-end analysis of one URL.

acquire -> extract -> classify -> score (SEO and GEO) -> report. Only
acquisition can fail; everything after a successful fetch always produces
a complete report.
"""

import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog

from analyzer.classification.classifier import PageTypeClassifier
from analyzer.crawler.acquire import PageAcquirer
from analyzer.extraction.page_data import PageData, extract_page_data
from analyzer.scoring.geo import GEO_MAX_SCORE, GEOAnalysisResult, GEOAnalyzer
from analyzer.scoring.seo import SEOAnalysisResult, SEOAnalyzer
from analyzer.signals.content import chunk_content
from analyzer.signals.patterns import find_quotable_sentences
from api.config import Settings, get_settings

logger = structlog.get_logger(__name__)

SEO_SHARE = 0.5
GEO_SHARE = 0.5
QUOTABLE_PREVIEW = 5

# (minimum score, grade), highest first
GRADES: tuple[tuple[int, str], ...] = (
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
)


def grade_for(score: int) -> str:
    for minimum, grade in GRADES:
        if score >= minimum:
            return grade
    return "F"


@dataclass(frozen=True)
class OverallScore:
    score: int
    grade: str
    seo: int
    geo: int

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "grade": self.grade,
            "breakdown": {"seo": self.seo, "geo": self.geo},
        }


def compute_overall_score(seo: SEOAnalysisResult, geo: GEOAnalysisResult) -> OverallScore:
    """Equal blend of SEO (0-100) and GEO rescaled from 0-800 to 0-100."""
    geo_normalized = geo.score / GEO_MAX_SCORE * 100
    score = round(SEO_SHARE * seo.score + GEO_SHARE * geo_normalized)
    score = max(0, min(100, score))
    return OverallScore(score=score, grade=grade_for(score), seo=seo.score, geo=geo.score)


@dataclass
class AnalysisReport:
    """Serializable result of one analysis."""

    url: str
    analyzed_at: datetime
    overall_score: OverallScore
    seo: SEOAnalysisResult
    geo: GEOAnalysisResult
    page_content: dict | None = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    duration_ms: int = 0

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "url": self.url,
            "analyzed_at": self.analyzed_at.isoformat(),
            "duration_ms": self.duration_ms,
            "overall_score": self.overall_score.to_dict(),
            "seo": self.seo.to_dict(),
            "geo": self.geo.to_dict(),
        }
        if self.page_content is not None:
            data["page_content"] = self.page_content
        return data


def page_content_preview(page: PageData) -> dict:
    """Content fields shown alongside the scores."""
    return {
        "title": page.metadata.title,
        "final_url": page.final_url,
        "load_time_ms": page.load_time_ms,
        "word_count": page.word_count,
        "headings": page.headings.to_dict(),
        "quotable_sentences": [
            sentence.to_dict()
            for sentence in find_quotable_sentences(page.text, limit=QUOTABLE_PREVIEW)
        ],
        "chunks": [chunk.to_dict() for chunk in chunk_content(page.text)],
        "text": page.text,
    }


def score_page(
    page: PageData,
    now: datetime | None = None,
    classifier: PageTypeClassifier | None = None,
) -> tuple[SEOAnalysisResult, GEOAnalysisResult, OverallScore]:
    """Classify and score an extracted page. Never raises for a well-formed page."""
    now = now or datetime.now(UTC)
    page_type = (classifier or PageTypeClassifier()).classify(page)
    seo = SEOAnalyzer().analyze(page, page_type)
    geo = GEOAnalyzer().analyze(page, page_type, now)
    return seo, geo, compute_overall_score(seo, geo)


class AnalysisPipeline:
    """Runs acquisition and scoring for a URL."""

    def __init__(
        self,
        acquirer: PageAcquirer | None = None,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ):
        self.settings = settings or get_settings()
        self.acquirer = acquirer or PageAcquirer(settings=self.settings)
        self.classifier = PageTypeClassifier()
        self._clock = clock

    async def analyze(self, url: str, include_content: bool = True) -> AnalysisReport:
        """
        Analyze ``url``.

        Raises:
            AcquisitionError: the page could not be fetched
        """
        start = time.perf_counter()
        acquired = await self.acquirer.acquire(url)

        page = extract_page_data(
            acquired.markup,
            acquired.url,
            final_url=acquired.final_url,
            status_code=acquired.status_code,
            load_time_ms=acquired.load_time_ms,
            redirects=acquired.redirects,
            headers=acquired.headers,
            robots_access=acquired.robots,
        )

        now = self._clock()
        seo, geo, overall = score_page(page, now, self.classifier)
        duration_ms = int((time.perf_counter() - start) * 1000)

        report = AnalysisReport(
            url=acquired.url,
            analyzed_at=now,
            overall_score=overall,
            seo=seo,
            geo=geo,
            page_content=page_content_preview(page) if include_content else None,
            duration_ms=duration_ms,
        )

        logger.info(
            "analysis_complete",
            url=report.url,
            report_id=report.id,
            overall=overall.score,
            grade=overall.grade,
            seo=seo.score,
            geo=geo.score,
            page_type=geo.page_type.type.value,
            duration_ms=duration_ms,
        )
        return report


async def analyze_url(url: str, include_content: bool = True) -> AnalysisReport:
    """Convenience function for one-off analyses."""
    return await AnalysisPipeline().analyze(url, include_content=include_content)
