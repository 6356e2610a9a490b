"""Assessment records and metrics extraction."""

from cognicare.assessment.metrics import (
    DEFAULT_DOMAIN_SCORE,
    MetricsExtractor,
    average_percentage,
    extract_behavioral_metrics,
    extract_cognitive_metrics,
    extract_speech_metrics,
    latest_of_type,
    metrics_extractor,
)
from cognicare.assessment.types import (
    COGNITIVE_DOMAINS,
    AssessmentDetails,
    AssessmentResult,
    AssessmentType,
    AttentionDetails,
    BehavioralDetails,
    BehavioralMetrics,
    CognitiveBaseline,
    CognitiveMetrics,
    DementiaRiskScore,
    EmergencyContact,
    MemoryDetails,
    RiskFactors,
    SpeechDetails,
    SpeechMetrics,
    SpeechTaskResult,
    UserProfile,
    VisuospatialDetails,
    utc_now,
)

__all__ = [
    # Types
    "COGNITIVE_DOMAINS",
    "AssessmentDetails",
    "AssessmentResult",
    "AssessmentType",
    "AttentionDetails",
    "BehavioralDetails",
    "BehavioralMetrics",
    "CognitiveBaseline",
    "CognitiveMetrics",
    "DementiaRiskScore",
    "EmergencyContact",
    "MemoryDetails",
    "RiskFactors",
    "SpeechDetails",
    "SpeechMetrics",
    "SpeechTaskResult",
    "UserProfile",
    "VisuospatialDetails",
    "utc_now",
    # Metrics
    "DEFAULT_DOMAIN_SCORE",
    "MetricsExtractor",
    "average_percentage",
    "extract_behavioral_metrics",
    "extract_cognitive_metrics",
    "extract_speech_metrics",
    "latest_of_type",
    "metrics_extractor",
]
