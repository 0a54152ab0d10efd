"""Issue and recommendation aggregation shared by both analyzers."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from analyzer.scoring.models import (
    PRIORITY_RANK,
    SEVERITY_RANK,
    CategoryResult,
    Issue,
    Priority,
    Recommendation,
    Severity,
)

RECOMMENDATION_LIMIT = 20
HIGH_LOSS_RATIO = 0.5
MEDIUM_LOSS_RATIO = 0.25

GATE_RECOMMENDATION = (
    "Fix AI crawler access before anything else: blocked or non-indexable pages "
    "cannot be cited regardless of content quality"
)


@dataclass
class Summary:
    status: str
    total_issues: int
    counts: dict[str, int] = field(default_factory=dict)
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "total_issues": self.total_issues,
            "counts": self.counts,
            "strengths": self.strengths,
            "weaknesses": self.weaknesses,
        }


def collect_issues(results: Mapping[str, CategoryResult]) -> list[Issue]:
    """All issues, critical first, then by points lost."""
    issues = [issue for result in results.values() for issue in result.issues]
    return sorted(issues, key=lambda issue: (SEVERITY_RANK[issue.severity], -issue.impact))


def priority_for(result: CategoryResult) -> Priority:
    """Priority from the share of the category's points that were lost."""
    if result.max_score <= 0:
        return Priority.LOW
    lost = result.points_lost / result.max_score
    if lost > HIGH_LOSS_RATIO:
        return Priority.HIGH
    if lost > MEDIUM_LOSS_RATIO:
        return Priority.MEDIUM
    return Priority.LOW


def prioritize_recommendations(
    results: Mapping[str, CategoryResult],
    gate_multiplier: float = 1.0,
    limit: int = RECOMMENDATION_LIMIT,
) -> list[Recommendation]:
    """
    Recommendations annotated with a priority, sorted and truncated.

    When the crawl-access gate reduced the score, a critical recommendation
    is placed first. It counts toward ``limit``.
    """
    annotated = [
        replace(rec, priority=priority_for(result))
        for result in results.values()
        for rec in result.recommendations
    ]
    annotated.sort(key=lambda rec: (PRIORITY_RANK[rec.priority], -rec.impact))

    if gate_multiplier < 1.0:
        gate = Recommendation(
            message=GATE_RECOMMENDATION,
            impact=round((1.0 - gate_multiplier) * 100, 2),
            source="ai_crawl_access",
            check="gate",
            priority=Priority.CRITICAL,
        )
        annotated.insert(0, gate)

    return annotated[:limit]


def summarize(
    status: str,
    issues: list[Issue],
    results: Mapping[str, CategoryResult] | None = None,
) -> Summary:
    counts = {severity.value: 0 for severity in Severity}
    for issue in issues:
        counts[issue.severity.value] += 1

    strengths: list[str] = []
    weaknesses: list[str] = []
    for result in (results or {}).values():
        if result.passed:
            strengths.append(result.name)
        elif result.percentage < 50:
            weaknesses.append(result.name)

    return Summary(
        status=status,
        total_issues=len(issues),
        counts=counts,
        strengths=strengths,
        weaknesses=weaknesses,
    )
