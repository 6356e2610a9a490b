"""Risk scoring, recommendations and trend analysis."""

from cognicare.risk.calculator import (
    CalculatorConfig,
    OverallRisk,
    RiskCalculator,
    create_risk_calculator,
    deviation_risk,
    risk_calculator,
)
from cognicare.risk.recommendations import (
    BEHAVIORAL_RECOMMENDATION,
    COGNITIVE_RECOMMENDATION,
    RISK_LEVEL_INFO,
    SPEECH_RECOMMENDATION,
    TIER_RECOMMENDATIONS,
    RecommendationConfig,
    RecommendationGenerator,
    RiskLevel,
    RiskLevelInfo,
    classify_risk_level,
    generate_recommendations,
    recommendation_generator,
)
from cognicare.risk.trends import (
    TREND_DOMAINS,
    TrendAnalysis,
    TrendAnalyzer,
    TrendAnalyzerConfig,
    TrendDirection,
    TrendFit,
    TrendPoint,
    create_trend_analyzer,
    trend_analyzer,
)

__all__ = [
    # Calculator
    "CalculatorConfig",
    "OverallRisk",
    "RiskCalculator",
    "create_risk_calculator",
    "deviation_risk",
    "risk_calculator",
    # Recommendations
    "BEHAVIORAL_RECOMMENDATION",
    "COGNITIVE_RECOMMENDATION",
    "RISK_LEVEL_INFO",
    "SPEECH_RECOMMENDATION",
    "TIER_RECOMMENDATIONS",
    "RecommendationConfig",
    "RecommendationGenerator",
    "RiskLevel",
    "RiskLevelInfo",
    "classify_risk_level",
    "generate_recommendations",
    "recommendation_generator",
    # Trends
    "TREND_DOMAINS",
    "TrendAnalysis",
    "TrendAnalyzer",
    "TrendAnalyzerConfig",
    "TrendDirection",
    "TrendFit",
    "TrendPoint",
    "create_trend_analyzer",
    "trend_analyzer",
]
