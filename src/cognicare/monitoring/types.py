"""Types and data models for the monitoring module.

Defines risk alerts and the thresholds used by the alert monitor.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, model_validator
from uuid_utils.compat import uuid7

from cognicare.assessment.types import utc_now

# =============================================================================
# Enums
# =============================================================================


class AlertType(str, Enum):
    """Kind of risk alert."""

    SIGNIFICANT_DECLINE = "significant_decline"  # Recent scores well below older ones
    NEW_HIGH_RISK = "new_high_risk"  # Risk score crossed into high risk
    BASELINE_DEVIATION = "baseline_deviation"  # Recent scores well below baseline
    ASSESSMENT_NEEDED = "assessment_needed"  # No assessment for too long


class AlertSeverity(str, Enum):
    """Severity level for risk alerts."""

    HIGH = "high"  # Prompt clinical follow-up
    MEDIUM = "medium"  # Review soon
    LOW = "low"  # For awareness only


# =============================================================================
# Alerts
# =============================================================================


@dataclass
class RiskAlert:
    """A threshold-crossing alert for one user.

    Alerts are value objects derived on demand; callers own persistence,
    de-duplication and acknowledgment tracking.

    Attributes:
        user_id: User the alert concerns.
        type: What triggered the alert.
        severity: How urgent the alert is.
        message: Human-readable summary.
        recommendations: Suggested follow-up actions.
        id: Unique identifier for this alert.
        created_at: When the alert was generated.
        acknowledged: Whether the alert has been acknowledged.
    """

    user_id: str
    type: AlertType
    severity: AlertSeverity
    message: str
    recommendations: list[str] = field(default_factory=list)
    id: UUID = field(default_factory=uuid7)
    created_at: datetime = field(default_factory=utc_now)
    acknowledged: bool = False

    def acknowledge(self) -> None:
        """Mark alert as acknowledged."""
        self.acknowledged = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": str(self.id),
            "user_id": self.user_id,
            "type": self.type.value,
            "severity": self.severity.value,
            "message": self.message,
            "recommendations": self.recommendations,
            "created_at": self.created_at.isoformat(),
            "acknowledged": self.acknowledged,
        }


# =============================================================================
# Configuration Models
# =============================================================================


class MonitorConfig(BaseModel):
    """Thresholds for the alert monitor.

    Percent thresholds are strict: a decline of exactly 15% raises no
    alert and exactly 25% is medium severity.
    """

    # Decline check
    decline_window_days: int = Field(
        default=30, ge=1, description="Assessments newer than this are 'recent'"
    )
    decline_min_per_group: int = Field(
        default=2, ge=1, description="Assessments needed in both recent and older groups"
    )
    decline_sample_size: int = Field(
        default=3, ge=1, description="Most recent assessments averaged per group"
    )
    decline_threshold_percent: float = Field(
        default=15.0, ge=0.0, le=100.0, description="Decline that raises an alert"
    )
    decline_high_percent: float = Field(
        default=25.0, ge=0.0, le=100.0, description="Decline that makes the alert high"
    )

    # New high risk check
    high_risk_threshold: int = Field(
        default=70, ge=0, le=100, description="Risk score classified as high risk"
    )

    # Baseline deviation check
    baseline_window_days: int = Field(
        default=14, ge=1, description="Window of assessments compared with baseline"
    )
    baseline_deviation_percent: float = Field(
        default=20.0, ge=0.0, le=100.0, description="Shortfall below baseline that alerts"
    )

    # Overdue check
    overdue_after_days: int = Field(
        default=90, ge=1, description="Days without assessment before one is needed"
    )

    # Guard
    min_assessments: int = Field(
        default=2, ge=0, description="Assessments a user needs before any check runs"
    )

    @model_validator(mode="after")
    def _check_decline_thresholds(self) -> "MonitorConfig":
        if self.decline_high_percent < self.decline_threshold_percent:
            raise ValueError("decline_high_percent must not be below decline_threshold_percent")
        return self
