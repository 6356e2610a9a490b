"""Behavioral pattern analysis from passively collected samples."""

from cognicare.behavioral.analyzer import (
    ActivitySample,
    BehavioralAnalyzer,
    BehavioralAnalyzerConfig,
    BehavioralPatternAnalysis,
    CircadianSample,
    TypingSample,
    build_behavioral_assessment,
    consistency,
    create_behavioral_analyzer,
)

__all__ = [
    "ActivitySample",
    "BehavioralAnalyzer",
    "BehavioralAnalyzerConfig",
    "BehavioralPatternAnalysis",
    "CircadianSample",
    "TypingSample",
    "build_behavioral_assessment",
    "consistency",
    "create_behavioral_analyzer",
]
