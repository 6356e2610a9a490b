"""Alert Monitor for cognitive risk changes.

This module compares a user's recent assessments with older ones, with
their baseline and with their stored risk scores, and raises alerts when
thresholds are crossed.

Checks (independent, each yields at most one alert):
    - Significant decline: recent average well below older average
    - New high risk: latest risk score crossed into high risk
    - Baseline deviation: recent memory/attention well below baseline
    - Assessment needed: no assessment for too long
"""

import math
from collections.abc import Sequence
from datetime import datetime, timedelta

from cognicare.assessment.metrics import average_percentage
from cognicare.assessment.types import (
    AssessmentResult,
    AssessmentType,
    CognitiveBaseline,
    DementiaRiskScore,
    UserProfile,
    utc_now,
)
from cognicare.core.logging import get_logger
from cognicare.monitoring.types import AlertSeverity, AlertType, MonitorConfig, RiskAlert

logger = get_logger(__name__)


DECLINE_RECOMMENDATIONS = [
    "Schedule follow-up assessment within 2 weeks",
    "Consider consultation with healthcare provider",
    "Review recent lifestyle changes or stressors",
    "Ensure adequate sleep and nutrition",
]

HIGH_RISK_RECOMMENDATIONS = [
    "Immediate consultation with neurologist or geriatrician recommended",
    "Consider comprehensive neuropsychological testing",
    "Discuss results with primary care physician",
    "Schedule follow-up assessment in 3 months",
]

BASELINE_RECOMMENDATIONS = [
    "Schedule comprehensive re-assessment",
    "Review recent health changes or medications",
    "Consider stress management techniques",
    "Discuss with healthcare provider",
]

OVERDUE_RECOMMENDATIONS = [
    "Schedule regular cognitive assessment",
    "Maintain consistent monitoring schedule",
    "Consider setting assessment reminders",
]


def _newest_first(assessments: Sequence[AssessmentResult]) -> list[AssessmentResult]:
    return sorted(assessments, key=lambda a: a.completed_at, reverse=True)


class AlertMonitor:
    """Raises risk alerts for a user.

    Example:
        monitor = AlertMonitor()
        alerts = monitor.analyze_risk_changes(profile, assessments, risk_scores)
        for alert in alerts:
            print(alert.severity.value, alert.message)
    """

    def __init__(self, config: MonitorConfig | None = None) -> None:
        """Initialize the monitor.

        Args:
            config: Alert thresholds.
        """
        self.config = config or MonitorConfig()

    def analyze_risk_changes(
        self,
        profile: UserProfile | None,
        assessments: Sequence[AssessmentResult],
        risk_scores: Sequence[DementiaRiskScore],
        now: datetime | None = None,
    ) -> list[RiskAlert]:
        """Run every check for one user.

        Args:
            profile: The user's profile; no alerts without one.
            assessments: The user's assessments, any order.
            risk_scores: The user's stored risk scores, oldest first.
            now: Reference time (default: current UTC time).

        Returns:
            Alerts in check order: decline, high risk, baseline, overdue.
        """
        if profile is None or len(assessments) < self.config.min_assessments:
            return []

        now = now or utc_now()
        user_id = profile.id

        candidates = [
            self.check_cognitive_decline(user_id, assessments, now),
            self.check_new_high_risk(user_id, risk_scores, now),
            self.check_baseline_deviation(
                user_id, profile.cognitive_baseline, assessments, now
            ),
            self.check_assessment_overdue(user_id, assessments, now),
        ]
        alerts = [alert for alert in candidates if alert is not None]

        for alert in alerts:
            logger.info(
                "Risk alert generated",
                user_id=user_id,
                alert_type=alert.type.value,
                severity=alert.severity.value,
            )

        return alerts

    def check_cognitive_decline(
        self,
        user_id: str,
        assessments: Sequence[AssessmentResult],
        now: datetime,
    ) -> RiskAlert | None:
        """Compare the latest recent assessments with the latest older ones."""
        cfg = self.config
        cutoff = now - timedelta(days=cfg.decline_window_days)
        ordered = _newest_first(assessments)
        recent = [a for a in ordered if a.completed_at > cutoff]
        older = [a for a in ordered if a.completed_at <= cutoff]

        if len(recent) < cfg.decline_min_per_group or len(older) < cfg.decline_min_per_group:
            return None

        recent_avg = average_percentage(recent[: cfg.decline_sample_size])
        older_avg = average_percentage(older[: cfg.decline_sample_size])
        if recent_avg is None or older_avg is None or older_avg <= 0:
            return None

        decline_percentage = (older_avg - recent_avg) / older_avg * 100
        if decline_percentage <= cfg.decline_threshold_percent:
            return None

        severity = (
            AlertSeverity.HIGH
            if decline_percentage > cfg.decline_high_percent
            else AlertSeverity.MEDIUM
        )
        return RiskAlert(
            user_id=user_id,
            type=AlertType.SIGNIFICANT_DECLINE,
            severity=severity,
            message=(
                "Significant decline detected in cognitive performance "
                f"({decline_percentage:.1f}% decrease)"
            ),
            recommendations=list(DECLINE_RECOMMENDATIONS),
            created_at=now,
        )

    def check_new_high_risk(
        self,
        user_id: str,
        risk_scores: Sequence[DementiaRiskScore],
        now: datetime,
    ) -> RiskAlert | None:
        """Alert when the latest stored score has just crossed into high risk."""
        if len(risk_scores) < 2:
            return None

        latest = risk_scores[-1]
        previous = risk_scores[-2]
        threshold = self.config.high_risk_threshold
        if not (latest.score >= threshold and previous.score < threshold):
            return None

        return RiskAlert(
            user_id=user_id,
            type=AlertType.NEW_HIGH_RISK,
            severity=AlertSeverity.HIGH,
            message="Risk classification has changed to High Risk",
            recommendations=list(HIGH_RISK_RECOMMENDATIONS),
            created_at=now,
        )

    def check_baseline_deviation(
        self,
        user_id: str,
        baseline: CognitiveBaseline | None,
        assessments: Sequence[AssessmentResult],
        now: datetime,
    ) -> RiskAlert | None:
        """Compare recent memory and attention averages with the baseline."""
        if baseline is None:
            return None

        cutoff = now - timedelta(days=self.config.baseline_window_days)
        recent = [a for a in assessments if a.completed_at > cutoff]
        if not recent:
            return None

        deviations: list[str] = []
        for label, domain, baseline_value in (
            ("Memory", AssessmentType.MEMORY, baseline.memory_score),
            ("Attention", AssessmentType.ATTENTION, baseline.attention_score),
        ):
            if baseline_value <= 0:
                logger.warning(
                    "Skipping baseline comparison for non-positive baseline",
                    user_id=user_id,
                    domain=domain.value,
                )
                continue

            recent_avg = average_percentage(a for a in recent if a.type == domain)
            if recent_avg is None:
                continue

            deviation = (baseline_value - recent_avg) / baseline_value * 100
            if deviation > self.config.baseline_deviation_percent:
                deviations.append(f"{label}: {deviation:.1f}% below baseline")

        if not deviations:
            return None

        return RiskAlert(
            user_id=user_id,
            type=AlertType.BASELINE_DEVIATION,
            severity=AlertSeverity.MEDIUM,
            message=(
                "Performance significantly below established baseline: "
                f"{', '.join(deviations)}"
            ),
            recommendations=list(BASELINE_RECOMMENDATIONS),
            created_at=now,
        )

    def check_assessment_overdue(
        self,
        user_id: str,
        assessments: Sequence[AssessmentResult],
        now: datetime,
    ) -> RiskAlert | None:
        """Alert when the newest assessment is older than the overdue limit."""
        if not assessments:
            return None

        last_completed = max(a.completed_at for a in assessments)
        days_since = (now - last_completed) / timedelta(days=1)
        if days_since <= self.config.overdue_after_days:
            return None

        return RiskAlert(
            user_id=user_id,
            type=AlertType.ASSESSMENT_NEEDED,
            severity=AlertSeverity.LOW,
            message=(
                f"Assessment overdue: {math.floor(days_since)} days since last assessment"
            ),
            recommendations=list(OVERDUE_RECOMMENDATIONS),
            created_at=now,
        )


alert_monitor = AlertMonitor()


def create_alert_monitor(config: MonitorConfig | None = None) -> AlertMonitor:
    """Create an alert monitor.

    Args:
        config: Optional monitor configuration.

    Returns:
        Configured AlertMonitor.
    """
    return AlertMonitor(config=config)
