"""
GEO citability score (0-800).

Active pillars are normalized to [0, 1], weighted by base weight times the
page type's multiplier and averaged over the weights actually used. The
0-1000 intermediate is rescaled to 0-800, then the crawl-access gate is
applied.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog

from analyzer.classification.classifier import PageTypeResult, fallback_result
from analyzer.extraction.page_data import PageData
from analyzer.scoring.aggregator import (
    Summary,
    collect_issues,
    prioritize_recommendations,
    summarize,
)
from analyzer.scoring.models import Issue, PillarResult, Recommendation
from analyzer.scoring.pillars import PILLAR_SCORERS
from analyzer.scoring.profiles import GATING_PILLAR, ScoringProfile, get_profile

logger = structlog.get_logger(__name__)

GEO_MAX_SCORE = 800
INTERMEDIATE_SCALE = 1000
RESCALE = GEO_MAX_SCORE / INTERMEDIATE_SCALE

# (crawl-access percentage below which the multiplier applies, multiplier)
GATE_STEPS: tuple[tuple[int, float], ...] = ((25, 0.25), (50, 0.5), (70, 0.8))

# (lower bound, label), highest first; lower bounds are inclusive
SCORE_BANDS: tuple[tuple[int, str], ...] = (
    (700, "Excellent"),
    (550, "Very Good"),
    (400, "Good"),
    (200, "Fair"),
    (0, "Poor"),
)


def gate_multiplier(crawl_access_percentage: float) -> float:
    """Non-increasing step penalty for pages engines cannot fetch or quote."""
    for below, multiplier in GATE_STEPS:
        if crawl_access_percentage < below:
            return multiplier
    return 1.0


def score_band(score: float) -> str:
    for lower, label in SCORE_BANDS:
        if score >= lower:
            return label
    return SCORE_BANDS[-1][1]


def combine_pillars(pillars: dict[str, PillarResult]) -> float:
    """Weighted average of pillar fractions, on the 0-1000 scale."""
    total_weight = sum(pillar.effective_weight for pillar in pillars.values())
    if total_weight <= 0:
        return 0.0
    weighted = sum(
        pillar.score / pillar.max_score * pillar.effective_weight
        for pillar in pillars.values()
        if pillar.max_score > 0
    )
    return weighted / total_weight * INTERMEDIATE_SCALE


@dataclass
class GEOAnalysisResult:
    score: int
    raw_score: float
    band: str
    pillars: dict[str, PillarResult]
    gate_multiplier: float
    page_type: PageTypeResult
    profile: ScoringProfile
    issues: list[Issue] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)
    summary: Summary | None = None

    @property
    def is_gated(self) -> bool:
        return self.gate_multiplier < 1.0

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "max_score": GEO_MAX_SCORE,
            "raw_score": self.raw_score,
            "band": self.band,
            "gate_multiplier": self.gate_multiplier,
            "is_gated": self.is_gated,
            "page_type": self.page_type.to_dict(),
            "profile": self.profile.to_dict(),
            "pillars": {key: pillar.to_dict() for key, pillar in self.pillars.items()},
            "issues": [issue.to_dict() for issue in self.issues],
            "recommendations": [rec.to_dict() for rec in self.recommendations],
            "summary": self.summary.to_dict() if self.summary else None,
        }


class GEOAnalyzer:
    """Scores how likely answer engines are to retrieve and cite a page."""

    def analyze(
        self,
        page: PageData,
        page_type: PageTypeResult | None = None,
        now: datetime | None = None,
    ) -> GEOAnalysisResult:
        page_type = page_type or fallback_result()
        now = now or datetime.now(UTC)
        profile = get_profile(page_type.type)

        pillars = {
            pillar.value: PILLAR_SCORERS[pillar](page, profile, now)
            for pillar in profile.active_pillars
        }

        raw_score = round(combine_pillars(pillars) * RESCALE, 2)
        multiplier = gate_multiplier(pillars[GATING_PILLAR.value].percentage)
        score = max(0, min(GEO_MAX_SCORE, round(raw_score * multiplier)))
        band = score_band(score)
        issues = collect_issues(pillars)

        result = GEOAnalysisResult(
            score=score,
            raw_score=raw_score,
            band=band,
            pillars=pillars,
            gate_multiplier=multiplier,
            page_type=page_type,
            profile=profile,
            issues=issues,
            recommendations=prioritize_recommendations(pillars, multiplier),
            summary=summarize(band, issues, pillars),
        )

        logger.info(
            "geo_score_calculated",
            url=page.url,
            page_type=page_type.type.value,
            score=score,
            raw_score=raw_score,
            band=band,
            gate_multiplier=multiplier,
        )
        return result


def analyze_geo(
    page: PageData, page_type: PageTypeResult | None = None, now: datetime | None = None
) -> GEOAnalysisResult:
    """Convenience function to run the GEO analyzer."""
    return GEOAnalyzer().analyze(page, page_type, now)
