"""Result types shared by both scoring models."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

PASS_RATIO = 0.7


class Severity(StrEnum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


SEVERITY_RANK = {Severity.CRITICAL: 0, Severity.WARNING: 1, Severity.INFO: 2}


class Priority(StrEnum):
    CRITICAL = "critical"  # Reserved for the crawl-access gate recommendation
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_RANK = {Priority.CRITICAL: 0, Priority.HIGH: 1, Priority.MEDIUM: 2, Priority.LOW: 3}


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check. Points are clamped to [0, max_points]."""

    value: Any
    passed: bool
    points: float
    max_points: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", round(max(0.0, min(self.points, self.max_points)), 2))

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "passed": self.passed,
            "points": self.points,
            "max_points": self.max_points,
        }


@dataclass(frozen=True)
class Issue:
    severity: Severity
    message: str
    impact: float  # Points lost
    source: str = ""
    check: str = ""

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "impact": self.impact,
            "source": self.source,
            "check": self.check,
        }


@dataclass(frozen=True)
class Recommendation:
    message: str
    impact: float  # Points recoverable
    source: str = ""
    check: str = ""
    priority: Priority | None = None

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "impact": self.impact,
            "source": self.source,
            "check": self.check,
            "priority": self.priority.value if self.priority else None,
        }


@dataclass
class CategoryResult:
    """One SEO category or GEO pillar."""

    key: str
    name: str
    max_score: float
    checks: dict[str, CheckResult] = field(default_factory=dict)
    issues: list[Issue] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def score(self) -> float:
        total = sum(check.points for check in self.checks.values())
        return round(max(0.0, min(total, self.max_score)), 2)

    @property
    def percentage(self) -> int:
        if self.max_score <= 0:
            return 0
        return round(self.score / self.max_score * 100)

    @property
    def passed(self) -> bool:
        return self.score >= PASS_RATIO * self.max_score

    @property
    def points_lost(self) -> float:
        return round(self.max_score - self.score, 2)

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "name": self.name,
            "score": self.score,
            "max_score": self.max_score,
            "percentage": self.percentage,
            "passed": self.passed,
            "checks": {key: check.to_dict() for key, check in self.checks.items()},
            "issues": [issue.to_dict() for issue in self.issues],
            "recommendations": [rec.to_dict() for rec in self.recommendations],
            "details": self.details,
        }


@dataclass
class PillarResult(CategoryResult):
    """A GEO pillar with its weighting for this run."""

    base_weight: float = 0.0
    multiplier: float = 1.0
    is_gating: bool = False

    @property
    def effective_weight(self) -> float:
        return round(self.base_weight * self.multiplier, 4)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update(
            {
                "base_weight": self.base_weight,
                "multiplier": self.multiplier,
                "effective_weight": self.effective_weight,
                "is_gating": self.is_gating,
            }
        )
        return data


class ScoreSheet:
    """Builder for a category or pillar.

    Every check has a point allotment. A failing check records one issue
    whose impact is the points it lost and, optionally, one recommendation.
    """

    def __init__(self, key: str, name: str, max_score: float):
        self.key = key
        self.name = name
        self.max_score = max_score
        self.checks: dict[str, CheckResult] = {}
        self.issues: list[Issue] = []
        self.recommendations: list[Recommendation] = []
        self.details: dict[str, Any] = {}

    def award(
        self,
        check: str,
        value: Any,
        points: float,
        max_points: float,
        *,
        passed: bool | None = None,
        severity: Severity = Severity.WARNING,
        issue: str | None = None,
        recommendation: str | None = None,
    ) -> CheckResult:
        """Record a check that earned ``points`` out of ``max_points``."""
        result = CheckResult(
            value=value,
            passed=points >= max_points if passed is None else passed,
            points=points,
            max_points=max_points,
        )
        self.checks[check] = result

        lost = round(max_points - result.points, 2)
        if lost > 0:
            if issue:
                self.issues.append(
                    Issue(
                        severity=severity,
                        message=issue,
                        impact=lost,
                        source=self.key,
                        check=check,
                    )
                )
            if recommendation:
                self.recommendations.append(
                    Recommendation(
                        message=recommendation,
                        impact=lost,
                        source=self.key,
                        check=check,
                    )
                )
        return result

    def deduct(
        self,
        check: str,
        value: Any,
        max_points: float,
        penalty: float = 0.0,
        **kwargs: Any,
    ) -> CheckResult:
        """Record a check that starts at ``max_points`` and loses ``penalty``."""
        return self.award(check, value, max_points - penalty, max_points, **kwargs)

    def note(self, check: str, message: str, severity: Severity = Severity.INFO) -> None:
        """Record an issue that costs no points."""
        self.issues.append(
            Issue(severity=severity, message=message, impact=0.0, source=self.key, check=check)
        )

    def build(self) -> CategoryResult:
        return CategoryResult(
            key=self.key,
            name=self.name,
            max_score=self.max_score,
            checks=self.checks,
            issues=self.issues,
            recommendations=self.recommendations,
            details=self.details,
        )

    def build_pillar(
        self, base_weight: float, multiplier: float = 1.0, is_gating: bool = False
    ) -> PillarResult:
        return PillarResult(
            key=self.key,
            name=self.name,
            max_score=self.max_score,
            checks=self.checks,
            issues=self.issues,
            recommendations=self.recommendations,
            details=self.details,
            base_weight=base_weight,
            multiplier=multiplier,
            is_gating=is_gating,
        )
