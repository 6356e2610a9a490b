"""Risk Calculator for dementia risk scores.

This module provides the RiskCalculator that:
1. Converts cognitive, speech and behavioral metrics into 0-100 domain risks
2. Measures cognitive deviation against a personal baseline or normative values
3. Blends the available domains into an overall score
4. Reports confidence based on which domains were supplied

Every domain risk is a weighted sum of per-metric deviations from a
reference value, so higher performance means lower risk. All references
and weights live in CalculatorConfig.
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

from cognicare.assessment.types import (
    BehavioralMetrics,
    CognitiveBaseline,
    CognitiveMetrics,
    RiskFactors,
    SpeechMetrics,
)
from cognicare.core.logging import get_logger
from cognicare.utils.numbers import round_half_up

logger = get_logger(__name__)

MAX_RISK = 100.0


@dataclass
class OverallRisk:
    """Result of an overall risk calculation.

    Attributes:
        score: Blended risk score (0-100, rounded).
        confidence: Confidence in the score (70-100).
        factors: Rounded per-domain risks; unscored domains report 0.
        domains_used: Domains that contributed to the blend.
    """

    score: int
    confidence: int
    factors: RiskFactors
    domains_used: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "score": self.score,
            "confidence": self.confidence,
            "factors": self.factors.model_dump(),
            "domains_used": self.domains_used,
        }


class CalculatorConfig(BaseModel):
    """Reference values and weights for the risk calculator."""

    # Cognitive normative references
    memory_reference: float = Field(default=85.0, gt=0, description="Normative memory score")
    attention_reference: float = Field(
        default=80.0, gt=0, description="Normative attention score"
    )
    visuospatial_reference: float = Field(
        default=75.0, gt=0, description="Normative visuospatial score"
    )
    processing_speed_reference: float = Field(
        default=70.0, gt=0, description="Normative processing speed"
    )
    executive_function_reference: float = Field(
        default=75.0, gt=0, description="Normative executive function"
    )

    # Cognitive weights
    memory_weight: float = Field(default=0.35, ge=0.0, le=1.0)
    attention_weight: float = Field(default=0.25, ge=0.0, le=1.0)
    visuospatial_weight: float = Field(default=0.20, ge=0.0, le=1.0)
    processing_speed_weight: float = Field(default=0.10, ge=0.0, le=1.0)
    executive_function_weight: float = Field(default=0.10, ge=0.0, le=1.0)

    # Speech references
    fluency_reference: float = Field(default=80.0, gt=0)
    coherence_reference: float = Field(default=85.0, gt=0)
    vocabulary_reference: float = Field(default=75.0, gt=0)
    articulation_reference: float = Field(default=90.0, gt=0)
    pause_frequency_scale: float = Field(
        default=20.0, gt=0, description="Pause frequency at which pause risk saturates"
    )

    # Speech weights
    fluency_weight: float = Field(default=0.30, ge=0.0, le=1.0)
    coherence_weight: float = Field(default=0.25, ge=0.0, le=1.0)
    vocabulary_weight: float = Field(default=0.20, ge=0.0, le=1.0)
    pause_frequency_weight: float = Field(default=0.15, ge=0.0, le=1.0)
    articulation_weight: float = Field(default=0.10, ge=0.0, le=1.0)

    # Behavioral references
    activity_reference: float = Field(default=70.0, gt=0)
    sleep_reference: float = Field(
        default=75.0, gt=0, description="Sleep score; deviation in either direction counts"
    )
    social_reference: float = Field(default=80.0, gt=0)
    routine_reference: float = Field(default=85.0, gt=0)

    # Behavioral weights
    activity_weight: float = Field(default=0.25, ge=0.0, le=1.0)
    sleep_weight: float = Field(default=0.25, ge=0.0, le=1.0)
    social_weight: float = Field(default=0.30, ge=0.0, le=1.0)
    routine_weight: float = Field(default=0.20, ge=0.0, le=1.0)

    # Domain blend weights
    cognitive_domain_weight: float = Field(default=0.60, gt=0.0, le=1.0)
    speech_domain_weight: float = Field(default=0.25, ge=0.0, le=1.0)
    behavioral_domain_weight: float = Field(default=0.15, ge=0.0, le=1.0)

    # Confidence
    base_confidence: int = Field(default=70, ge=0, le=100)
    speech_confidence_bonus: int = Field(default=20, ge=0, le=100)
    behavioral_confidence_bonus: int = Field(default=10, ge=0, le=100)

    @property
    def cognitive_references(self) -> dict[str, float]:
        """Get normative cognitive references keyed by metric name."""
        return {
            "memory_score": self.memory_reference,
            "attention_score": self.attention_reference,
            "visuospatial_score": self.visuospatial_reference,
            "processing_speed": self.processing_speed_reference,
            "executive_function": self.executive_function_reference,
        }

    @property
    def cognitive_weights(self) -> dict[str, float]:
        """Get cognitive weights keyed by metric name."""
        return {
            "memory_score": self.memory_weight,
            "attention_score": self.attention_weight,
            "visuospatial_score": self.visuospatial_weight,
            "processing_speed": self.processing_speed_weight,
            "executive_function": self.executive_function_weight,
        }

    @property
    def speech_weights(self) -> dict[str, float]:
        """Get speech weights keyed by metric name."""
        return {
            "fluency": self.fluency_weight,
            "coherence": self.coherence_weight,
            "vocabulary_diversity": self.vocabulary_weight,
            "pause_frequency": self.pause_frequency_weight,
            "articulation": self.articulation_weight,
        }

    @property
    def behavioral_weights(self) -> dict[str, float]:
        """Get behavioral weights keyed by metric name."""
        return {
            "activity_level": self.activity_weight,
            "sleep_pattern": self.sleep_weight,
            "social_interaction": self.social_weight,
            "routine_adherence": self.routine_weight,
        }

    @property
    def weight_groups(self) -> dict[str, dict[str, float]]:
        """Get every weight group that must sum to 1.0."""
        return {
            "cognitive": self.cognitive_weights,
            "speech": self.speech_weights,
            "behavioral": self.behavioral_weights,
            "domain": {
                "cognitive": self.cognitive_domain_weight,
                "speech": self.speech_domain_weight,
                "behavioral": self.behavioral_domain_weight,
            },
        }


def deviation_risk(reference: float, observed: float) -> float:
    """One-sided shortfall of observed below reference, as a fraction.

    Performance at or above the reference carries no risk.
    """
    return max(0.0, (reference - observed) / reference)


class RiskCalculator:
    """Calculates dementia risk scores from assessment metrics.

    The calculator is stateless apart from its configuration, so a single
    instance can be shared.

    Example:
        ```python
        calculator = RiskCalculator()

        result = calculator.calculate_overall_risk(
            cognitive_metrics,
            speech_metrics=speech,
            baseline=profile.cognitive_baseline,
        )
        print(f"Score: {result.score} (confidence {result.confidence}%)")
        ```
    """

    def __init__(self, config: CalculatorConfig | None = None):
        """Initialize the risk calculator.

        Args:
            config: Calculator configuration.
        """
        self.config = config or CalculatorConfig()

    def calculate_cognitive_risk(
        self,
        metrics: CognitiveMetrics,
        baseline: CognitiveBaseline | CognitiveMetrics | None = None,
    ) -> float:
        """Calculate cognitive risk (0-100).

        Each sub-metric is compared with the user's baseline value when the
        baseline provides a positive one, otherwise with the normative
        reference.

        Args:
            metrics: Current cognitive metrics.
            baseline: Optional personal baseline.

        Returns:
            Cognitive risk, capped at 100.
        """
        references = self._cognitive_references(baseline)
        weights = self.config.cognitive_weights
        observed = metrics.to_dict()

        weighted = sum(
            deviation_risk(references[name], observed[name]) * weight
            for name, weight in weights.items()
        )
        return min(MAX_RISK, weighted * 100)

    def calculate_speech_risk(self, metrics: SpeechMetrics) -> float:
        """Calculate speech risk (0-100).

        Pause frequency counts directly: more pauses mean more risk,
        saturating at the configured scale.

        Args:
            metrics: Speech metrics.

        Returns:
            Speech risk, capped at 100.
        """
        cfg = self.config
        risks = {
            "fluency": deviation_risk(cfg.fluency_reference, metrics.fluency),
            "coherence": deviation_risk(cfg.coherence_reference, metrics.coherence),
            "vocabulary_diversity": deviation_risk(
                cfg.vocabulary_reference, metrics.vocabulary_diversity
            ),
            "pause_frequency": min(1.0, metrics.pause_frequency / cfg.pause_frequency_scale),
            "articulation": deviation_risk(cfg.articulation_reference, metrics.articulation),
        }
        return min(MAX_RISK, self._weighted(risks, cfg.speech_weights) * 100)

    def calculate_behavioral_risk(self, metrics: BehavioralMetrics) -> float:
        """Calculate behavioral risk (0-100).

        Sleep is scored by absolute distance from its reference, so both
        too little and too much count; the other terms are one-sided.

        Args:
            metrics: Behavioral metrics.

        Returns:
            Behavioral risk, capped at 100.
        """
        cfg = self.config
        risks = {
            "activity_level": deviation_risk(cfg.activity_reference, metrics.activity_level),
            "sleep_pattern": abs(metrics.sleep_pattern - cfg.sleep_reference)
            / cfg.sleep_reference,
            "social_interaction": deviation_risk(
                cfg.social_reference, metrics.social_interaction
            ),
            "routine_adherence": deviation_risk(cfg.routine_reference, metrics.routine_adherence),
        }
        return min(MAX_RISK, self._weighted(risks, cfg.behavioral_weights) * 100)

    def calculate_overall_risk(
        self,
        cognitive_metrics: CognitiveMetrics,
        speech_metrics: SpeechMetrics | None = None,
        behavioral_metrics: BehavioralMetrics | None = None,
        baseline: CognitiveBaseline | CognitiveMetrics | None = None,
    ) -> OverallRisk:
        """Blend domain risks into an overall score.

        Cognitive risk always contributes. Speech and behavioral risk
        contribute only when their metrics are supplied, and the blend is
        renormalized over the included weights.

        Args:
            cognitive_metrics: Cognitive metrics (required).
            speech_metrics: Optional speech metrics.
            behavioral_metrics: Optional behavioral metrics.
            baseline: Optional personal cognitive baseline.

        Returns:
            OverallRisk with score, confidence and factors.
        """
        cfg = self.config
        cognitive_risk = self.calculate_cognitive_risk(cognitive_metrics, baseline)
        speech_risk = (
            self.calculate_speech_risk(speech_metrics) if speech_metrics is not None else 0.0
        )
        behavioral_risk = (
            self.calculate_behavioral_risk(behavioral_metrics)
            if behavioral_metrics is not None
            else 0.0
        )

        total_weight = cfg.cognitive_domain_weight
        weighted_score = cognitive_risk * cfg.cognitive_domain_weight
        confidence = cfg.base_confidence
        domains_used = ["cognitive"]

        if speech_metrics is not None:
            weighted_score += speech_risk * cfg.speech_domain_weight
            total_weight += cfg.speech_domain_weight
            confidence += cfg.speech_confidence_bonus
            domains_used.append("speech")

        if behavioral_metrics is not None:
            weighted_score += behavioral_risk * cfg.behavioral_domain_weight
            total_weight += cfg.behavioral_domain_weight
            confidence += cfg.behavioral_confidence_bonus
            domains_used.append("behavioral")

        result = OverallRisk(
            score=round_half_up(weighted_score / total_weight),
            confidence=min(100, confidence),
            factors=RiskFactors(
                cognitive=round_half_up(cognitive_risk),
                speech=round_half_up(speech_risk),
                behavioral=round_half_up(behavioral_risk),
            ),
            domains_used=domains_used,
        )

        logger.debug(
            "Overall risk calculated",
            score=result.score,
            confidence=result.confidence,
            cognitive=cognitive_risk,
            speech=speech_risk,
            behavioral=behavioral_risk,
            domains=domains_used,
        )

        return result

    def _cognitive_references(
        self, baseline: CognitiveBaseline | CognitiveMetrics | None
    ) -> dict[str, float]:
        """Resolve the reference value for each cognitive sub-metric."""
        references = dict(self.config.cognitive_references)
        if baseline is None:
            return references

        for name in references:
            value = getattr(baseline, name, None)
            if value is None:
                continue
            if value <= 0:
                logger.warning(
                    "Ignoring non-positive baseline value",
                    metric=name,
                    value=value,
                )
                continue
            references[name] = value
        return references

    @staticmethod
    def _weighted(risks: dict[str, float], weights: dict[str, float]) -> float:
        return sum(risks[name] * weight for name, weight in weights.items())


risk_calculator = RiskCalculator()


def create_risk_calculator(config: CalculatorConfig | None = None) -> RiskCalculator:
    """Create a risk calculator.

    Args:
        config: Optional calculator configuration.

    Returns:
        Configured RiskCalculator.
    """
    return RiskCalculator(config=config)
