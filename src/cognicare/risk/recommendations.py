"""Recommendation generation and risk level classification.

Maps an overall risk score to a tier of recommendations, adds
domain-specific advice for any domain whose risk exceeds the factor
threshold, and classifies scores into display risk levels.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field

from cognicare.assessment.types import RiskFactors


class RiskLevel(str, Enum):
    """Display risk level classification."""

    VERY_LOW = "very_low"  # 0-19
    LOW = "low"  # 20-39
    MODERATE = "moderate"  # 40-69
    HIGH = "high"  # 70-100


@dataclass(frozen=True)
class RiskLevelInfo:
    """Label and description shown for a risk level."""

    level: RiskLevel
    label: str
    description: str


RISK_LEVEL_INFO: dict[RiskLevel, RiskLevelInfo] = {
    RiskLevel.HIGH: RiskLevelInfo(
        RiskLevel.HIGH, "High Risk", "Significant cognitive concerns detected"
    ),
    RiskLevel.MODERATE: RiskLevelInfo(
        RiskLevel.MODERATE, "Moderate Risk", "Some cognitive changes observed"
    ),
    RiskLevel.LOW: RiskLevelInfo(RiskLevel.LOW, "Low Risk", "Minimal cognitive concerns"),
    RiskLevel.VERY_LOW: RiskLevelInfo(
        RiskLevel.VERY_LOW, "Very Low Risk", "Cognitive function appears normal"
    ),
}

TIER_RECOMMENDATIONS: dict[RiskLevel, tuple[str, ...]] = {
    RiskLevel.HIGH: (
        "Immediate consultation with a neurologist or geriatrician is recommended",
        "Consider comprehensive neuropsychological testing",
    ),
    RiskLevel.MODERATE: (
        "Schedule follow-up assessment in 3-6 months",
        "Discuss results with primary care physician",
    ),
    RiskLevel.LOW: (
        "Continue regular monitoring with annual assessments",
        "Maintain cognitive stimulation activities",
    ),
    RiskLevel.VERY_LOW: ("Continue current lifestyle and reassess annually",),
}

COGNITIVE_RECOMMENDATION = "Engage in memory training exercises and cognitive stimulation"
SPEECH_RECOMMENDATION = "Consider speech therapy evaluation"
BEHAVIORAL_RECOMMENDATION = "Focus on maintaining regular sleep schedule and social activities"


class RecommendationConfig(BaseModel):
    """Thresholds for recommendation tiers."""

    high_threshold: int = Field(default=70, ge=0, le=100, description="Score for HIGH tier")
    moderate_threshold: int = Field(
        default=40, ge=0, le=100, description="Score for MODERATE tier"
    )
    low_threshold: int = Field(default=20, ge=0, le=100, description="Score for LOW tier")
    factor_threshold: int = Field(
        default=50, ge=0, le=100, description="Domain risk above which advice is added"
    )


class RecommendationGenerator:
    """Generates textual recommendations from a risk score.

    Example:
        generator = RecommendationGenerator()
        lines = generator.generate_recommendations(62, factors)
    """

    def __init__(self, config: RecommendationConfig | None = None) -> None:
        """Initialize generator.

        Args:
            config: Tier thresholds.
        """
        self.config = config or RecommendationConfig()

    def classify_risk_level(self, score: float) -> RiskLevel:
        """Classify a score into a display risk level."""
        if score >= self.config.high_threshold:
            return RiskLevel.HIGH
        elif score >= self.config.moderate_threshold:
            return RiskLevel.MODERATE
        elif score >= self.config.low_threshold:
            return RiskLevel.LOW
        else:
            return RiskLevel.VERY_LOW

    def describe_risk_level(self, score: float) -> RiskLevelInfo:
        """Get label and description for a score."""
        return RISK_LEVEL_INFO[self.classify_risk_level(score)]

    def generate_recommendations(self, score: float, factors: RiskFactors) -> list[str]:
        """Build the ordered recommendation list.

        The score tier always contributes first; then cognitive, speech and
        behavioral advice is appended for each factor above the threshold.
        Nothing is de-duplicated.

        Args:
            score: Overall risk score.
            factors: Per-domain risk factors.

        Returns:
            Recommendations in display order.
        """
        recommendations = list(TIER_RECOMMENDATIONS[self.classify_risk_level(score)])

        threshold = self.config.factor_threshold
        if factors.cognitive > threshold:
            recommendations.append(COGNITIVE_RECOMMENDATION)
        if factors.speech > threshold:
            recommendations.append(SPEECH_RECOMMENDATION)
        if factors.behavioral > threshold:
            recommendations.append(BEHAVIORAL_RECOMMENDATION)

        return recommendations


recommendation_generator = RecommendationGenerator()


def generate_recommendations(score: float, factors: RiskFactors) -> list[str]:
    """Generate recommendations with the default generator."""
    return recommendation_generator.generate_recommendations(score, factors)


def classify_risk_level(score: float) -> RiskLevel:
    """Classify a score with the default generator."""
    return recommendation_generator.classify_risk_level(score)
