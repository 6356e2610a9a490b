"""Screening service.

Ties storage, metric extraction, risk scoring, alerting and trend
analysis together for one user at a time.
"""

from collections.abc import Sequence
from datetime import datetime

from cognicare.assessment.metrics import MetricsExtractor, metrics_extractor
from cognicare.assessment.types import (
    AssessmentResult,
    CognitiveBaseline,
    DementiaRiskScore,
    UserProfile,
    utc_now,
)
from cognicare.config.settings import Settings, get_settings
from cognicare.core.logging import LogContext, get_logger
from cognicare.monitoring.alert_monitor import AlertMonitor
from cognicare.monitoring.types import RiskAlert
from cognicare.risk.calculator import RiskCalculator
from cognicare.risk.recommendations import RecommendationGenerator
from cognicare.risk.trends import TrendAnalysis, TrendAnalyzer
from cognicare.storage.store import AssessmentStore, InMemoryAssessmentStore
from cognicare.utils.exceptions import UserNotFoundError

logger = get_logger(__name__)


class ScreeningService:
    """Scores, monitors and trends a user's screening history.

    Example:
        service = ScreeningService(store=InMemoryAssessmentStore())
        service.store.save_profile(profile)
        service.store.append_assessment(result)
        risk = service.refresh_risk_score(profile.id)
        alerts = service.get_alerts(profile.id)
    """

    def __init__(
        self,
        store: AssessmentStore | None = None,
        calculator: RiskCalculator | None = None,
        monitor: AlertMonitor | None = None,
        trend_analyzer: TrendAnalyzer | None = None,
        settings: Settings | None = None,
        recommender: RecommendationGenerator | None = None,
        extractor: MetricsExtractor | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            store: Storage backend (default: new in-memory store).
            calculator: Risk calculator.
            monitor: Alert monitor.
            trend_analyzer: Trend analyzer.
            settings: Application settings (default: cached settings).
            recommender: Recommendation generator.
            extractor: Metrics extractor.
        """
        self.store = store if store is not None else InMemoryAssessmentStore()
        self.calculator = calculator or RiskCalculator()
        self.monitor = monitor or AlertMonitor()
        self.trend_analyzer = trend_analyzer or TrendAnalyzer()
        self.settings = settings or get_settings()
        self.recommender = recommender or RecommendationGenerator()
        self.extractor = extractor or metrics_extractor

    @staticmethod
    def should_update_risk_score(
        latest: DementiaRiskScore | None,
        assessments: Sequence[AssessmentResult],
    ) -> bool:
        """Check whether the stored risk score is stale.

        Args:
            latest: The user's current risk score, if any.
            assessments: The user's assessments.

        Returns:
            True when there are assessments and either no stored score or
            an assessment completed after the score was generated.
        """
        if not assessments:
            return False
        if latest is None:
            return True
        newest = max(a.completed_at for a in assessments)
        return newest > latest.generated_at

    def compute_risk_score(
        self,
        user_id: str,
        assessments: Sequence[AssessmentResult],
        baseline: CognitiveBaseline | None = None,
        generated_at: datetime | None = None,
    ) -> DementiaRiskScore:
        """Score a user's assessments without persisting anything.

        Args:
            user_id: User being scored.
            assessments: The user's assessments.
            baseline: The user's cognitive baseline, if established.
            generated_at: Timestamp for the new score (default: now).

        Returns:
            A new DementiaRiskScore with recommendations.
        """
        cognitive = self.extractor.extract_cognitive_metrics(assessments)
        speech = self.extractor.extract_speech_metrics(assessments)
        behavioral = self.extractor.extract_behavioral_metrics(assessments)

        overall = self.calculator.calculate_overall_risk(
            cognitive, speech, behavioral, baseline
        )
        recommendations = self.recommender.generate_recommendations(
            overall.score, overall.factors
        )

        return DementiaRiskScore(
            user_id=user_id,
            score=overall.score,
            confidence=overall.confidence,
            factors=overall.factors,
            recommendations=recommendations,
            generated_at=generated_at or utc_now(),
        )

    def refresh_risk_score(
        self, user_id: str, now: datetime | None = None
    ) -> DementiaRiskScore | None:
        """Recompute and store the risk score when it is stale.

        Also records the user's cognitive baseline the first time they have
        enough assessments. An existing baseline is never replaced.

        Args:
            user_id: User to refresh.
            now: Timestamp for a new score and baseline (default: now).

        Returns:
            The current risk score, or None if the user has no assessments.

        Raises:
            UserNotFoundError: If the user has no profile.
        """
        with LogContext(operation="refresh_risk_score", user_id=user_id):
            profile = self._require_profile(user_id)
            assessments = self.store.list_assessments(user_id)
            latest = self.store.latest_risk_score(user_id)

            if not self.should_update_risk_score(latest, assessments):
                logger.debug("Risk score is current", assessments=len(assessments))
                return latest

            now = now or utc_now()
            risk_score = self.compute_risk_score(
                user_id, assessments, profile.cognitive_baseline, generated_at=now
            )
            self.store.append_risk_score(risk_score)
            logger.info(
                "Risk score updated",
                score=risk_score.score,
                confidence=risk_score.confidence,
            )

            if (
                profile.cognitive_baseline is None
                and len(assessments) >= self.settings.baseline_min_assessments
            ):
                cognitive = self.extractor.extract_cognitive_metrics(assessments)
                self.store.set_cognitive_baseline(
                    user_id, CognitiveBaseline.from_metrics(cognitive, established_at=now)
                )

            return risk_score

    def get_alerts(self, user_id: str, now: datetime | None = None) -> list[RiskAlert]:
        """Run the alert checks for a user.

        Args:
            user_id: User to check.
            now: Reference time (default: now).

        Returns:
            Alerts raised for the user; empty for unknown users.
        """
        with LogContext(operation="get_alerts", user_id=user_id):
            return self.monitor.analyze_risk_changes(
                self.store.get_profile(user_id),
                self.store.list_assessments(user_id),
                self.store.list_risk_scores(user_id),
                now=now,
            )

    def get_trends(self, user_id: str) -> list[TrendAnalysis]:
        """Per-domain score trends for a user."""
        return self.trend_analyzer.generate_trend_analysis(
            user_id, self.store.list_assessments(user_id)
        )

    def _require_profile(self, user_id: str) -> UserProfile:
        profile = self.store.get_profile(user_id)
        if profile is None:
            raise UserNotFoundError(user_id)
        return profile


def create_screening_service(
    store: AssessmentStore | None = None,
    settings: Settings | None = None,
) -> ScreeningService:
    """Create a screening service with default engine components.

    Args:
        store: Optional storage backend.
        settings: Optional settings.

    Returns:
        Configured ScreeningService.
    """
    return ScreeningService(store=store, settings=settings)
