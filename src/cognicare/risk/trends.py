"""Trend analysis for per-domain assessment scores.

Fits an ordinary least-squares line to a domain's percentage scores
over time and classifies the monthly change rate as improving, stable
or declining. The absolute Pearson correlation of time and score is
reported as the trend's significance.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from cognicare.assessment.types import AssessmentResult, AssessmentType
from cognicare.core.logging import get_logger

logger = get_logger(__name__)

MS_PER_DAY = 24 * 60 * 60 * 1000

TREND_DOMAINS: tuple[AssessmentType, ...] = (
    AssessmentType.MEMORY,
    AssessmentType.ATTENTION,
    AssessmentType.VISUOSPATIAL,
    AssessmentType.SPEECH,
)


# =============================================================================
# Enums
# =============================================================================


class TrendDirection(str, Enum):
    """Direction of a fitted score trend."""

    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


# =============================================================================
# Data Models
# =============================================================================


@dataclass(frozen=True)
class TrendPoint:
    """One dated percentage score."""

    date: datetime
    score: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"date": self.date.isoformat(), "score": self.score}


@dataclass(frozen=True)
class TrendFit:
    """Classified result of a linear fit.

    Attributes:
        trend: Direction classification.
        change_rate: Fitted change in percentage points per month.
        significance: Absolute correlation between time and score (0-1).
    """

    trend: TrendDirection = TrendDirection.STABLE
    change_rate: float = 0.0
    significance: float = 0.0


@dataclass
class TrendAnalysis:
    """Trend of one domain for one user."""

    user_id: str
    domain: AssessmentType
    trend: TrendDirection
    change_rate: float
    significance: float
    data_points: list[TrendPoint] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "user_id": self.user_id,
            "domain": self.domain.value,
            "trend": self.trend.value,
            "change_rate": self.change_rate,
            "significance": self.significance,
            "data_points": [p.to_dict() for p in self.data_points],
        }


# =============================================================================
# Configuration
# =============================================================================


class TrendAnalyzerConfig(BaseModel):
    """Configuration for trend analyzer."""

    stable_threshold: float = Field(
        default=1.0, ge=0.0, description="Monthly change below which a trend is stable"
    )
    days_per_month: int = Field(default=30, ge=1, le=31, description="Length of a month")
    min_total_assessments: int = Field(
        default=3, ge=1, description="Assessments a user needs before any trend is reported"
    )
    min_domain_points: int = Field(
        default=3, ge=2, description="Data points a domain needs for a trend"
    )


# =============================================================================
# Trend Analyzer
# =============================================================================


class TrendAnalyzer:
    """Analyzes per-domain score trends.

    Example:
        analyzer = TrendAnalyzer()
        trends = analyzer.generate_trend_analysis(user_id, assessments)
        for t in trends:
            print(t.domain.value, t.trend.value, round(t.change_rate, 1))
    """

    def __init__(self, config: TrendAnalyzerConfig | None = None) -> None:
        """Initialize analyzer.

        Args:
            config: Trend analyzer configuration.
        """
        self.config = config or TrendAnalyzerConfig()

    @property
    def ms_per_month(self) -> int:
        """Milliseconds in one configured month."""
        return self.config.days_per_month * MS_PER_DAY

    def calculate_trend(self, points: Sequence[TrendPoint]) -> TrendFit:
        """Fit a linear trend to dated scores.

        Regresses score on the timestamp in epoch milliseconds and scales
        the slope to a monthly change rate.

        Args:
            points: Dated scores, any order.

        Returns:
            TrendFit; neutral when fewer than two points or when all
            points share one timestamp.
        """
        if len(points) < 2:
            return TrendFit()

        xs = [p.date.timestamp() * 1000 for p in points]
        ys = [p.score for p in points]
        n = len(points)
        mean_x = sum(xs) / n
        mean_y = sum(ys) / n

        sxy = sum((x - mean_x) * (y - mean_y) for x, y in zip(xs, ys, strict=True))
        sxx = sum((x - mean_x) ** 2 for x in xs)
        syy = sum((y - mean_y) ** 2 for y in ys)

        if sxx == 0:
            logger.debug("Trend fit skipped, all points share one timestamp", points=n)
            return TrendFit()

        slope = sxy / sxx
        change_rate = slope * self.ms_per_month

        correlation = sxy / math.sqrt(sxx * syy) if syy > 0 else 0.0
        significance = abs(correlation)

        if abs(change_rate) < self.config.stable_threshold:
            trend = TrendDirection.STABLE
        elif change_rate > 0:
            trend = TrendDirection.IMPROVING
        else:
            trend = TrendDirection.DECLINING

        return TrendFit(trend=trend, change_rate=change_rate, significance=significance)

    def generate_trend_analysis(
        self, user_id: str, assessments: Sequence[AssessmentResult]
    ) -> list[TrendAnalysis]:
        """Analyze trends for each cognitive and speech domain.

        Args:
            user_id: User the assessments belong to.
            assessments: The user's assessment history.

        Returns:
            One TrendAnalysis per domain with enough usable data points.
        """
        if len(assessments) < self.config.min_total_assessments:
            return []

        trends: list[TrendAnalysis] = []
        for domain in TREND_DOMAINS:
            points = self.domain_points(assessments, domain)
            if len(points) < self.config.min_domain_points:
                continue

            fit = self.calculate_trend(points)
            trends.append(
                TrendAnalysis(
                    user_id=user_id,
                    domain=domain,
                    trend=fit.trend,
                    change_rate=fit.change_rate,
                    significance=fit.significance,
                    data_points=points,
                )
            )

        logger.debug(
            "Trend analysis generated",
            user_id=user_id,
            domains=[t.domain.value for t in trends],
        )
        return trends

    @staticmethod
    def domain_points(
        assessments: Sequence[AssessmentResult], domain: AssessmentType
    ) -> list[TrendPoint]:
        """Chronological percentage scores of one domain.

        Records with a non-positive max score are left out.
        """
        domain_assessments = sorted(
            (a for a in assessments if a.type == domain and a.percentage is not None),
            key=lambda a: a.completed_at,
        )
        return [
            TrendPoint(date=a.completed_at, score=a.percentage)  # type: ignore[arg-type]
            for a in domain_assessments
        ]


trend_analyzer = TrendAnalyzer()


def create_trend_analyzer(config: TrendAnalyzerConfig | None = None) -> TrendAnalyzer:
    """Create a trend analyzer.

    Args:
        config: Optional analyzer configuration.

    Returns:
        Configured TrendAnalyzer.
    """
    return TrendAnalyzer(config=config)
