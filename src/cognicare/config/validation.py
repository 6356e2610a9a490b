"""Configuration validation for startup checks.

Validates settings and the scoring and monitoring configurations before
any user is scored.

Usage:
    from cognicare.config.validation import validate_configuration

    results = validate_configuration()
    for result in results:
        print(result)
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from cognicare.config.settings import Environment, Settings, get_settings
from cognicare.core.logging import get_logger
from cognicare.monitoring.types import MonitorConfig
from cognicare.risk.calculator import CalculatorConfig
from cognicare.risk.recommendations import RecommendationConfig
from cognicare.risk.trends import TrendAnalyzerConfig
from cognicare.utils.exceptions import ConfigurationError

logger = get_logger(__name__)

WEIGHT_SUM_TOLERANCE = 1e-6


class ValidationSeverity(str, Enum):
    """Severity of configuration validation issues."""

    ERROR = "error"  # Scores would be wrong
    WARNING = "warning"  # Works, but probably unintended


@dataclass
class ValidationResult:
    """Result of a configuration validation check."""

    field: str
    severity: ValidationSeverity
    message: str
    suggestion: str | None = None

    def __str__(self) -> str:
        prefix = "ERROR" if self.severity == ValidationSeverity.ERROR else "WARNING"
        result = f"[{prefix}] {self.field}: {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result


def validate_configuration(
    settings: Settings | None = None,
    calculator_config: CalculatorConfig | None = None,
    monitor_config: MonitorConfig | None = None,
    trend_config: TrendAnalyzerConfig | None = None,
    recommendation_config: RecommendationConfig | None = None,
) -> list[ValidationResult]:
    """Validate application configuration.

    Args:
        settings: Settings to validate (default: global settings)
        calculator_config: Risk calculator configuration (default: defaults)
        monitor_config: Alert monitor configuration (default: defaults)
        trend_config: Trend analyzer configuration (default: defaults)
        recommendation_config: Recommendation thresholds (default: defaults)

    Returns:
        List of validation results (empty if all checks pass)
    """
    if settings is None:
        settings = get_settings()

    results: list[ValidationResult] = []
    results.extend(_validate_environment(settings))
    results.extend(_validate_calculator(calculator_config or CalculatorConfig()))
    results.extend(_validate_monitor(monitor_config or MonitorConfig()))
    results.extend(_validate_trends(trend_config or TrendAnalyzerConfig()))
    results.extend(
        _validate_recommendations(recommendation_config or RecommendationConfig())
    )
    return results


def validate_or_raise(settings: Settings | None = None, **configs: Any) -> None:
    """Validate configuration and raise if errors found.

    Args:
        settings: Settings to validate
        **configs: Component configurations, as for validate_configuration

    Raises:
        ConfigurationError: If any validation errors are found
    """
    results = validate_configuration(settings, **configs)
    errors = [r for r in results if r.severity == ValidationSeverity.ERROR]

    if errors:
        error_messages = "\n".join(str(e) for e in errors)
        raise ConfigurationError(f"Configuration validation failed:\n{error_messages}")

    warnings = [r for r in results if r.severity == ValidationSeverity.WARNING]
    for warning in warnings:
        logger.warning("Configuration warning", detail=str(warning))


# =============================================================================
# Validators
# =============================================================================


def _validate_environment(settings: Settings) -> list[ValidationResult]:
    """Validate environment-specific settings."""
    results: list[ValidationResult] = []

    if settings.environment == Environment.PRODUCTION and settings.log_level == "DEBUG":
        results.append(
            ValidationResult(
                field="log_level",
                severity=ValidationSeverity.WARNING,
                message="DEBUG log level in production may expose health data",
                suggestion="Use INFO or WARNING for production",
            )
        )

    if settings.environment == Environment.PRODUCTION and settings.log_json is False:
        results.append(
            ValidationResult(
                field="log_json",
                severity=ValidationSeverity.WARNING,
                message="Console log output in production",
                suggestion="Unset COGNICARE_LOG_JSON to use JSON logs in production",
            )
        )

    return results


def _validate_calculator(config: CalculatorConfig) -> list[ValidationResult]:
    """Every weight group must sum to 1.0."""
    results: list[ValidationResult] = []

    for group, weights in config.weight_groups.items():
        total = sum(weights.values())
        if not math.isclose(total, 1.0, abs_tol=WEIGHT_SUM_TOLERANCE):
            results.append(
                ValidationResult(
                    field=f"calculator.{group}_weights",
                    severity=ValidationSeverity.ERROR,
                    message=f"Weights sum to {total:.4f}, expected 1.0",
                    suggestion=f"Adjust {', '.join(weights)} so they sum to 1.0",
                )
            )

    return results


def _validate_monitor(config: MonitorConfig) -> list[ValidationResult]:
    """Validate alert windows and thresholds."""
    results: list[ValidationResult] = []

    if config.decline_sample_size < config.decline_min_per_group:
        results.append(
            ValidationResult(
                field="monitor.decline_sample_size",
                severity=ValidationSeverity.ERROR,
                message="Sample size is smaller than the minimum group size",
                suggestion="Set decline_sample_size >= decline_min_per_group",
            )
        )

    if config.baseline_window_days > config.overdue_after_days:
        results.append(
            ValidationResult(
                field="monitor.baseline_window_days",
                severity=ValidationSeverity.WARNING,
                message="Baseline window is longer than the overdue limit",
            )
        )

    return results


def _validate_trends(config: TrendAnalyzerConfig) -> list[ValidationResult]:
    """Validate trend data requirements."""
    results: list[ValidationResult] = []

    if config.min_total_assessments < config.min_domain_points:
        results.append(
            ValidationResult(
                field="trends.min_total_assessments",
                severity=ValidationSeverity.WARNING,
                message="Fewer total assessments required than points per domain",
                suggestion="Set min_total_assessments >= min_domain_points",
            )
        )

    return results


def _validate_recommendations(config: RecommendationConfig) -> list[ValidationResult]:
    """Risk tiers must be strictly ordered."""
    results: list[ValidationResult] = []

    if not (config.low_threshold < config.moderate_threshold < config.high_threshold):
        results.append(
            ValidationResult(
                field="recommendations.thresholds",
                severity=ValidationSeverity.ERROR,
                message=(
                    f"Risk tiers out of order: low={config.low_threshold}, "
                    f"moderate={config.moderate_threshold}, high={config.high_threshold}"
                ),
                suggestion="Use low < moderate < high",
            )
        )

    return results


def get_configuration_summary(settings: Settings | None = None) -> dict[str, Any]:
    """Get a summary of current configuration (safe for logging).

    Args:
        settings: Settings to summarize

    Returns:
        Dictionary with configuration summary
    """
    if settings is None:
        settings = get_settings()

    return {
        "environment": settings.environment.value,
        "log_level": settings.log_level,
        "log_json": settings.log_json,
        "baseline_min_assessments": settings.baseline_min_assessments,
    }
