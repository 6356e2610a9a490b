"""Metrics extraction from assessment records.

Reduces a user's assessment history into the fixed-shape metrics
records consumed by the risk calculator:
- Cognitive metrics averaged per domain, with a neutral default
- Speech metrics from the most recent speech assessment
- Behavioral metrics from the most recent behavioral assessment
"""

from collections.abc import Iterable, Sequence

from cognicare.assessment.types import (
    AssessmentResult,
    AssessmentType,
    BehavioralDetails,
    BehavioralMetrics,
    CognitiveMetrics,
    SpeechDetails,
    SpeechMetrics,
)
from cognicare.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_DOMAIN_SCORE = 50.0


def average_percentage(assessments: Iterable[AssessmentResult]) -> float | None:
    """Average percentage score over assessments.

    Records with a non-positive max_score cannot be normalized and are
    skipped.

    Args:
        assessments: Records to average.

    Returns:
        Mean percentage, or None if no usable record remains.
    """
    percentages: list[float] = []
    for assessment in assessments:
        percentage = assessment.percentage
        if percentage is None:
            logger.warning(
                "Skipping assessment with non-positive max score",
                assessment_id=str(assessment.id),
                assessment_type=assessment.type.value,
                max_score=assessment.max_score,
            )
            continue
        percentages.append(percentage)

    if not percentages:
        return None
    return sum(percentages) / len(percentages)


def latest_of_type(
    assessments: Sequence[AssessmentResult], assessment_type: AssessmentType
) -> AssessmentResult | None:
    """Most recent assessment of a type; later list entries win ties."""
    latest: AssessmentResult | None = None
    for assessment in assessments:
        if assessment.type != assessment_type:
            continue
        if latest is None or assessment.completed_at >= latest.completed_at:
            latest = assessment
    return latest


class MetricsExtractor:
    """Derives normalized metrics from a user's assessments.

    Example:
        extractor = MetricsExtractor()
        cognitive = extractor.extract_cognitive_metrics(assessments)
        speech = extractor.extract_speech_metrics(assessments)
    """

    def __init__(self, default_domain_score: float = DEFAULT_DOMAIN_SCORE) -> None:
        """Initialize the extractor.

        Args:
            default_domain_score: Score used for a cognitive domain with no data.
        """
        self.default_domain_score = default_domain_score

    def extract_cognitive_metrics(
        self, assessments: Sequence[AssessmentResult]
    ) -> CognitiveMetrics:
        """Average each cognitive domain over all its assessments.

        Processing speed has no test of its own and mirrors attention;
        executive function is the mean of memory and attention.
        """
        memory = self._domain_average(assessments, AssessmentType.MEMORY)
        attention = self._domain_average(assessments, AssessmentType.ATTENTION)
        visuospatial = self._domain_average(assessments, AssessmentType.VISUOSPATIAL)

        metrics = CognitiveMetrics(
            memory_score=memory,
            attention_score=attention,
            visuospatial_score=visuospatial,
            processing_speed=attention,
            executive_function=(memory + attention) / 2,
        )
        logger.debug("Cognitive metrics extracted", **metrics.to_dict())
        return metrics

    def extract_speech_metrics(
        self, assessments: Sequence[AssessmentResult]
    ) -> SpeechMetrics | None:
        """Metrics stored on the most recent speech assessment, if any."""
        latest = latest_of_type(assessments, AssessmentType.SPEECH)
        if latest is None or not isinstance(latest.details, SpeechDetails):
            return None
        return latest.details.metrics

    def extract_behavioral_metrics(
        self, assessments: Sequence[AssessmentResult]
    ) -> BehavioralMetrics | None:
        """Metrics from the most recent behavioral assessment, if any."""
        latest = latest_of_type(assessments, AssessmentType.BEHAVIORAL)
        if latest is None or not isinstance(latest.details, BehavioralDetails):
            return None
        details = latest.details
        return BehavioralMetrics(
            activity_level=details.activity_score,
            sleep_pattern=details.circadian_score,
            social_interaction=details.social_score,
            routine_adherence=details.routine_score,
        )

    def _domain_average(
        self, assessments: Sequence[AssessmentResult], assessment_type: AssessmentType
    ) -> float:
        average = average_percentage(a for a in assessments if a.type == assessment_type)
        return self.default_domain_score if average is None else average


metrics_extractor = MetricsExtractor()


def extract_cognitive_metrics(assessments: Sequence[AssessmentResult]) -> CognitiveMetrics:
    """Extract cognitive metrics with the default extractor."""
    return metrics_extractor.extract_cognitive_metrics(assessments)


def extract_speech_metrics(assessments: Sequence[AssessmentResult]) -> SpeechMetrics | None:
    """Extract speech metrics with the default extractor."""
    return metrics_extractor.extract_speech_metrics(assessments)


def extract_behavioral_metrics(
    assessments: Sequence[AssessmentResult],
) -> BehavioralMetrics | None:
    """Extract behavioral metrics with the default extractor."""
    return metrics_extractor.extract_behavioral_metrics(assessments)
