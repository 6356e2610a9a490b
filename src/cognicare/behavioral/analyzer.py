"""Behavioral pattern analysis.

Scores passively collected samples (physical activity, screen time and
sleep quality, typing dynamics) over the last week and turns the scores
into insights, risk factors and BehavioralMetrics for the risk
calculator. The social interaction score is supplied by the caller.
"""

import statistics
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, Field

from cognicare.assessment.types import (
    AssessmentResult,
    AssessmentType,
    BehavioralDetails,
    BehavioralMetrics,
    utc_now,
)
from cognicare.core.logging import get_logger
from cognicare.utils.numbers import round_half_up

logger = get_logger(__name__)


# =============================================================================
# Samples
# =============================================================================


@dataclass(frozen=True)
class ActivitySample:
    """Physical activity reading, activity_level 0-100."""

    timestamp: datetime
    activity_level: float
    duration_ms: float = 0.0


@dataclass(frozen=True)
class CircadianSample:
    """Hourly screen time and estimated sleep quality (0-100)."""

    timestamp: datetime
    screen_time_minutes: float
    sleep_quality: float
    activity_level: float = 0.0


@dataclass(frozen=True)
class TypingSample:
    """Typing dynamics over a burst of keystrokes.

    Attributes:
        timestamp: When the burst ended.
        keystroke_speed: Keystrokes per second.
        error_rate: Corrections per 100 keystrokes.
        pause_duration_ms: Longest gap between keystrokes.
    """

    timestamp: datetime
    keystroke_speed: float
    error_rate: float
    pause_duration_ms: float = 0.0


# =============================================================================
# Configuration and Results
# =============================================================================


class BehavioralAnalyzerConfig(BaseModel):
    """Configuration for behavioral scoring."""

    window_days: int = Field(default=7, ge=1, description="Only samples this recent count")
    default_score: float = Field(
        default=75.0, ge=0, le=100, description="Score for a domain without samples"
    )
    default_social_score: float = Field(default=70.0, ge=0, le=100)
    default_consistency: float = Field(
        default=50.0, ge=0, le=100, description="Consistency with fewer than 2 values"
    )
    low_score_threshold: float = Field(default=50.0, ge=0, le=100)
    high_activity_threshold: float = Field(default=80.0, ge=0, le=100)
    risk_factor_threshold: float = Field(default=40.0, ge=0, le=100)
    multiple_domains_count: int = Field(
        default=3, ge=1, description="Low domains needed for the multiple-domains risk factor"
    )


@dataclass
class BehavioralPatternAnalysis:
    """Scores, insights and risk factors for one analysis run."""

    activity_score: float
    social_score: float
    circadian_score: float
    typing_score: float
    activity_consistency: float
    overall_score: float
    insights: list[str] = field(default_factory=list)
    risk_factors: list[str] = field(default_factory=list)
    analyzed_at: datetime = field(default_factory=utc_now)

    def to_metrics(self) -> BehavioralMetrics:
        """Map the scores onto the risk calculator's behavioral metrics."""
        return BehavioralMetrics(
            activity_level=self.activity_score,
            sleep_pattern=self.circadian_score,
            social_interaction=self.social_score,
            routine_adherence=self.activity_consistency,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "activity_score": self.activity_score,
            "social_score": self.social_score,
            "circadian_score": self.circadian_score,
            "typing_score": self.typing_score,
            "activity_consistency": self.activity_consistency,
            "overall_score": self.overall_score,
            "insights": self.insights,
            "risk_factors": self.risk_factors,
            "analyzed_at": self.analyzed_at.isoformat(),
        }


def consistency(values: Sequence[float], default: float = 50.0) -> float:
    """Score steadiness of a series; lower spread scores higher.

    Returns ``default`` for fewer than two values, otherwise
    ``max(0, 100 - 2 * population standard deviation)``.
    """
    if len(values) < 2:
        return default
    return max(0.0, 100 - statistics.pstdev(values) * 2)


def _mean(values: Iterable[float]) -> float:
    return statistics.fmean(values)


# =============================================================================
# Analyzer
# =============================================================================


class BehavioralAnalyzer:
    """Collects behavioral samples and scores them.

    Example:
        analyzer = BehavioralAnalyzer()
        analyzer.record_activity(ActivitySample(timestamp=now, activity_level=60))
        analysis = analyzer.analyze_behavioral_patterns()
        metrics = analysis.to_metrics()
    """

    def __init__(self, config: BehavioralAnalyzerConfig | None = None) -> None:
        """Initialize the analyzer with empty sample buffers.

        Args:
            config: Behavioral scoring configuration.
        """
        self.config = config or BehavioralAnalyzerConfig()
        self._activity: list[ActivitySample] = []
        self._circadian: list[CircadianSample] = []
        self._typing: list[TypingSample] = []

    # -------------------------------------------------------------------------
    # Recording
    # -------------------------------------------------------------------------

    def record_activity(self, sample: ActivitySample) -> None:
        """Add an activity sample."""
        self._activity.append(sample)

    def record_circadian(self, sample: CircadianSample) -> None:
        """Add a circadian sample."""
        self._circadian.append(sample)

    def record_typing(self, sample: TypingSample) -> None:
        """Add a typing sample."""
        self._typing.append(sample)

    def clear(self) -> None:
        """Drop all recorded samples."""
        self._activity.clear()
        self._circadian.clear()
        self._typing.clear()

    def data_summary(self) -> dict[str, Any]:
        """Sample counts and the newest sample time."""
        timestamps = [
            s.timestamp for s in (*self._activity, *self._circadian, *self._typing)
        ]
        return {
            "activity_data_points": len(self._activity),
            "circadian_data_points": len(self._circadian),
            "typing_data_points": len(self._typing),
            "last_updated": max(timestamps).isoformat() if timestamps else None,
        }

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    def analyze_behavioral_patterns(
        self,
        social_score: float | None = None,
        now: datetime | None = None,
    ) -> BehavioralPatternAnalysis:
        """Score every domain over the recent window.

        Args:
            social_score: Externally measured social score (0-100).
            now: Reference time (default: current UTC time).

        Returns:
            BehavioralPatternAnalysis with insights and risk factors.
        """
        cfg = self.config
        now = now or utc_now()
        cutoff = now - timedelta(days=cfg.window_days)

        activity = [s for s in self._activity if s.timestamp > cutoff]
        circadian = [s for s in self._circadian if s.timestamp > cutoff]
        typing = [s for s in self._typing if s.timestamp > cutoff]

        activity_consistency = consistency(
            [s.activity_level for s in activity], cfg.default_consistency
        )
        activity_score = self.score_activity(activity)
        circadian_score = self.score_circadian(circadian)
        typing_score = self.score_typing(typing)
        social = cfg.default_social_score if social_score is None else social_score
        social = max(0.0, min(100.0, social))

        scores = (activity_score, social, circadian_score, typing_score)
        analysis = BehavioralPatternAnalysis(
            activity_score=activity_score,
            social_score=social,
            circadian_score=circadian_score,
            typing_score=typing_score,
            activity_consistency=activity_consistency,
            overall_score=sum(scores) / len(scores),
            insights=self.generate_insights(*scores),
            risk_factors=self.identify_risk_factors(*scores),
            analyzed_at=now,
        )

        logger.debug(
            "Behavioral patterns analyzed",
            activity_samples=len(activity),
            circadian_samples=len(circadian),
            typing_samples=len(typing),
            overall_score=round(analysis.overall_score, 1),
        )
        return analysis

    def score_activity(self, samples: Sequence[ActivitySample]) -> float:
        """Blend mean activity with its consistency."""
        if not samples:
            return self.config.default_score
        levels = [s.activity_level for s in samples]
        steadiness = consistency(levels, self.config.default_consistency)
        return min(100.0, _mean(levels) * 0.7 + steadiness * 0.3)

    def score_circadian(self, samples: Sequence[CircadianSample]) -> float:
        """Blend mean sleep quality with screen-time consistency."""
        if not samples:
            return self.config.default_score
        sleep_quality = _mean(s.sleep_quality for s in samples)
        screen_consistency = consistency(
            [s.screen_time_minutes for s in samples], self.config.default_consistency
        )
        return sleep_quality * 0.6 + screen_consistency * 0.4

    def score_typing(self, samples: Sequence[TypingSample]) -> float:
        """Blend typing speed with error rate."""
        if not samples:
            return self.config.default_score
        speed_score = min(100.0, _mean(s.keystroke_speed for s in samples) * 20)
        error_score = max(0.0, 100 - _mean(s.error_rate for s in samples) * 2)
        return speed_score * 0.6 + error_score * 0.4

    def generate_insights(
        self, activity: float, social: float, circadian: float, typing: float
    ) -> list[str]:
        """Plain-language observations for the user."""
        low = self.config.low_score_threshold
        insights: list[str] = []

        if activity < low:
            insights.append(
                "Activity levels appear lower than typical - consider gentle exercise or movement"
            )
        elif activity > self.config.high_activity_threshold:
            insights.append("Excellent activity levels maintained - keep up the good work!")

        if social < low:
            insights.append(
                "Social interaction patterns suggest potential isolation - consider reaching "
                "out to friends or family"
            )
        if circadian < low:
            insights.append(
                "Sleep patterns may be disrupted - consider establishing a regular bedtime routine"
            )
        if typing < low:
            insights.append(
                "Typing patterns show some changes - this could indicate motor skill variations"
            )

        if not insights:
            insights.append("Behavioral patterns appear stable and healthy")
        return insights

    def identify_risk_factors(
        self, activity: float, social: float, circadian: float, typing: float
    ) -> list[str]:
        """Behavioral risk factors worth flagging to a clinician."""
        cfg = self.config
        limit = cfg.risk_factor_threshold
        risk_factors: list[str] = []

        if activity < limit:
            risk_factors.append("Significantly reduced physical activity")
        if social < limit:
            risk_factors.append("Social withdrawal patterns detected")
        if circadian < limit:
            risk_factors.append("Disrupted sleep-wake cycles")
        if typing < limit:
            risk_factors.append("Changes in fine motor control")

        low_domains = sum(
            1 for score in (activity, social, circadian, typing) if score < cfg.low_score_threshold
        )
        if low_domains >= cfg.multiple_domains_count:
            risk_factors.append("Multiple behavioral domains showing concerning patterns")
        return risk_factors


def build_behavioral_assessment(
    user_id: str,
    analysis: BehavioralPatternAnalysis,
    duration_ms: float = 0.0,
) -> AssessmentResult:
    """Record an analysis as a behavioral assessment scored out of 100.

    Args:
        user_id: User the samples belong to.
        analysis: Result of analyze_behavioral_patterns.
        duration_ms: Time spent on the behavioral check-in.

    Returns:
        Behavioral AssessmentResult.
    """
    return AssessmentResult(
        user_id=user_id,
        type=AssessmentType.BEHAVIORAL,
        score=round_half_up(analysis.overall_score),
        max_score=100,
        duration_ms=duration_ms,
        details=BehavioralDetails(
            activity_score=analysis.activity_score,
            social_score=analysis.social_score,
            circadian_score=analysis.circadian_score,
            typing_score=analysis.typing_score,
            routine_score=analysis.activity_consistency,
            overall_score=analysis.overall_score,
            insights=list(analysis.insights),
            risk_factors=list(analysis.risk_factors),
        ),
        completed_at=analysis.analyzed_at,
    )


def create_behavioral_analyzer(
    config: BehavioralAnalyzerConfig | None = None,
) -> BehavioralAnalyzer:
    """Create a behavioral analyzer.

    Args:
        config: Optional analyzer configuration.

    Returns:
        BehavioralAnalyzer with empty sample buffers.
    """
    return BehavioralAnalyzer(config=config)
