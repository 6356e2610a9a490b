"""Unit tests for the RiskCalculator."""

import pytest

from cognicare.assessment.metrics import extract_cognitive_metrics
from cognicare.assessment.types import (
    AssessmentResult,
    AssessmentType,
    BehavioralMetrics,
    CognitiveBaseline,
    CognitiveMetrics,
    SpeechMetrics,
)
from cognicare.risk.calculator import (
    CalculatorConfig,
    OverallRisk,
    RiskCalculator,
    create_risk_calculator,
    deviation_risk,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def calculator() -> RiskCalculator:
    """Create a default calculator."""
    return create_risk_calculator()


@pytest.fixture
def normative_cognitive() -> CognitiveMetrics:
    """Cognitive metrics exactly at the normative references."""
    return CognitiveMetrics(
        memory_score=85,
        attention_score=80,
        visuospatial_score=75,
        processing_speed=70,
        executive_function=75,
    )


@pytest.fixture
def zero_cognitive() -> CognitiveMetrics:
    """Cognitive metrics at zero."""
    return CognitiveMetrics(
        memory_score=0,
        attention_score=0,
        visuospatial_score=0,
        processing_speed=0,
        executive_function=0,
    )


@pytest.fixture
def normative_speech() -> SpeechMetrics:
    """Speech metrics at the references with no pauses."""
    return SpeechMetrics(
        fluency=80, coherence=85, vocabulary_diversity=75, pause_frequency=0, articulation=90
    )


@pytest.fixture
def normative_behavioral() -> BehavioralMetrics:
    """Behavioral metrics at the references."""
    return BehavioralMetrics(
        activity_level=70, sleep_pattern=75, social_interaction=80, routine_adherence=85
    )


# =============================================================================
# Deviation Tests
# =============================================================================


class TestDeviationRisk:
    """Tests for deviation_risk."""

    def test_shortfall(self):
        """Test shortfall is a fraction of the reference."""
        assert deviation_risk(80, 60) == pytest.approx(0.25)

    def test_above_reference_is_zero(self):
        """Test exceeding the reference carries no risk."""
        assert deviation_risk(80, 95) == 0.0

    def test_zero_observed(self):
        """Test zero performance is full risk."""
        assert deviation_risk(85, 0) == pytest.approx(1.0)


# =============================================================================
# Cognitive Risk Tests
# =============================================================================


class TestCognitiveRisk:
    """Tests for calculate_cognitive_risk."""

    def test_normative_is_zero(self, calculator, normative_cognitive):
        """Test normative metrics carry no risk."""
        assert calculator.calculate_cognitive_risk(normative_cognitive) == 0.0

    def test_zero_metrics_is_max(self, calculator, zero_cognitive):
        """Test zero metrics give maximum risk."""
        assert calculator.calculate_cognitive_risk(zero_cognitive) == pytest.approx(100.0)

    def test_memory_and_attention_example(self, calculator):
        """Test memory 80 and attention 60 with other domains defaulted."""
        assessments = [
            AssessmentResult(user_id="u", type=AssessmentType.MEMORY, score=80, max_score=100),
            AssessmentResult(
                user_id="u", type=AssessmentType.ATTENTION, score=60, max_score=100
            ),
        ]
        metrics = extract_cognitive_metrics(assessments)

        risk = calculator.calculate_cognitive_risk(metrics)

        expected = (
            0.35 * 5 / 85 + 0.25 * 20 / 80 + 0.20 * 25 / 75 + 0.10 * 10 / 70 + 0.10 * 5 / 75
        ) * 100
        assert risk == pytest.approx(expected)
        assert risk == pytest.approx(17.07, abs=0.01)

    def test_baseline_replaces_reference(self, calculator, normative_cognitive):
        """Test a personal baseline is the reference for its metrics."""
        metrics = CognitiveMetrics(
            memory_score=80,
            attention_score=80,
            visuospatial_score=75,
            processing_speed=70,
            executive_function=75,
        )
        baseline = CognitiveBaseline(
            memory_score=80, attention_score=80, visuospatial_score=75
        )

        assert calculator.calculate_cognitive_risk(metrics) == pytest.approx(
            0.35 * 5 / 85 * 100
        )
        assert calculator.calculate_cognitive_risk(metrics, baseline) == 0.0

    def test_baseline_above_performance(self, calculator):
        """Test shortfall against a high baseline."""
        metrics = CognitiveMetrics(
            memory_score=85,
            attention_score=80,
            visuospatial_score=75,
            processing_speed=70,
            executive_function=75,
        )
        baseline = CognitiveBaseline(
            memory_score=100, attention_score=80, visuospatial_score=75
        )

        assert calculator.calculate_cognitive_risk(metrics, baseline) == pytest.approx(5.25)

    def test_missing_baseline_fields_use_normative(self, calculator, zero_cognitive):
        """Test baseline fields that are absent fall back to normative values."""
        baseline = CognitiveBaseline(
            memory_score=85, attention_score=80, visuospatial_score=75
        )
        assert calculator.calculate_cognitive_risk(
            zero_cognitive, baseline
        ) == pytest.approx(100.0)

    def test_non_positive_baseline_ignored(self, calculator, normative_cognitive):
        """Test a zero baseline value does not divide by zero."""
        baseline = CognitiveBaseline(memory_score=0, attention_score=80, visuospatial_score=75)
        assert calculator.calculate_cognitive_risk(normative_cognitive, baseline) == 0.0

    def test_metrics_as_baseline(self, calculator, normative_cognitive):
        """Test a full metrics record can serve as baseline."""
        assert (
            calculator.calculate_cognitive_risk(normative_cognitive, normative_cognitive)
            == 0.0
        )


# =============================================================================
# Speech and Behavioral Risk Tests
# =============================================================================


class TestSpeechRisk:
    """Tests for calculate_speech_risk."""

    def test_normative_is_zero(self, calculator, normative_speech):
        """Test reference speech with no pauses carries no risk."""
        assert calculator.calculate_speech_risk(normative_speech) == 0.0

    def test_zero_metrics(self, calculator):
        """Test all-zero speech; pauses add nothing."""
        assert calculator.calculate_speech_risk(SpeechMetrics()) == pytest.approx(85.0)

    def test_pause_frequency_saturates(self, calculator, normative_speech):
        """Test pause risk is capped once frequency reaches the scale."""
        at_scale = normative_speech.model_copy(update={"pause_frequency": 20})
        beyond = normative_speech.model_copy(update={"pause_frequency": 60})

        assert calculator.calculate_speech_risk(at_scale) == pytest.approx(15.0)
        assert calculator.calculate_speech_risk(beyond) == pytest.approx(15.0)

    def test_partial_pauses(self, calculator, normative_speech):
        """Test pause risk grows linearly below the scale."""
        metrics = normative_speech.model_copy(update={"pause_frequency": 10})
        assert calculator.calculate_speech_risk(metrics) == pytest.approx(7.5)


class TestBehavioralRisk:
    """Tests for calculate_behavioral_risk."""

    def test_normative_is_zero(self, calculator, normative_behavioral):
        """Test reference behavior carries no risk."""
        assert calculator.calculate_behavioral_risk(normative_behavioral) == 0.0

    def test_zero_metrics_is_max(self, calculator):
        """Test zero behavior gives maximum risk."""
        metrics = BehavioralMetrics(
            activity_level=0, sleep_pattern=0, social_interaction=0, routine_adherence=0
        )
        assert calculator.calculate_behavioral_risk(metrics) == pytest.approx(100.0)

    def test_excess_sleep_counts(self, calculator, normative_behavioral):
        """Test sleep above the reference is also risk."""
        metrics = BehavioralMetrics(
            activity_level=70, sleep_pattern=100, social_interaction=80, routine_adherence=85
        )
        assert calculator.calculate_behavioral_risk(metrics) == pytest.approx(25 / 75 * 25)

    def test_high_activity_is_not_risk(self, calculator):
        """Test other behavioral terms are one-sided."""
        metrics = BehavioralMetrics(
            activity_level=100, sleep_pattern=75, social_interaction=100, routine_adherence=100
        )
        assert calculator.calculate_behavioral_risk(metrics) == 0.0


# =============================================================================
# Overall Risk Tests
# =============================================================================


class TestOverallRisk:
    """Tests for calculate_overall_risk."""

    def test_cognitive_only(self, calculator, zero_cognitive):
        """Test cognitive-only scoring."""
        result = calculator.calculate_overall_risk(zero_cognitive)

        assert isinstance(result, OverallRisk)
        assert result.score == 100
        assert result.confidence == 70
        assert result.factors.cognitive == 100
        assert result.factors.speech == 0
        assert result.factors.behavioral == 0
        assert result.domains_used == ["cognitive"]

    def test_with_speech(self, calculator, zero_cognitive, normative_speech):
        """Test speech is blended with renormalized weights."""
        result = calculator.calculate_overall_risk(zero_cognitive, normative_speech)

        assert result.score == 71  # 60 / 0.85 = 70.59
        assert result.confidence == 90
        assert result.domains_used == ["cognitive", "speech"]

    def test_with_behavioral(self, calculator, zero_cognitive, normative_behavioral):
        """Test behavioral without speech."""
        result = calculator.calculate_overall_risk(
            zero_cognitive, behavioral_metrics=normative_behavioral
        )

        assert result.score == 80
        assert result.confidence == 80
        assert result.factors.speech == 0

    def test_all_domains(
        self, calculator, zero_cognitive, normative_speech, normative_behavioral
    ):
        """Test all three domains."""
        result = calculator.calculate_overall_risk(
            zero_cognitive, normative_speech, normative_behavioral
        )

        assert result.score == 60
        assert result.confidence == 100
        assert result.domains_used == ["cognitive", "speech", "behavioral"]

    def test_normative_everything_is_zero(
        self, calculator, normative_cognitive, normative_speech, normative_behavioral
    ):
        """Test normative inputs give zero risk."""
        result = calculator.calculate_overall_risk(
            normative_cognitive, normative_speech, normative_behavioral
        )

        assert result.score == 0
        assert result.factors.cognitive == 0

    def test_confidence_capped(self, zero_cognitive, normative_speech, normative_behavioral):
        """Test confidence never exceeds 100."""
        calc = RiskCalculator(CalculatorConfig(base_confidence=90))
        result = calc.calculate_overall_risk(
            zero_cognitive, normative_speech, normative_behavioral
        )
        assert result.confidence == 100

    def test_to_dict(self, calculator, normative_cognitive):
        """Test dictionary conversion."""
        data = calculator.calculate_overall_risk(normative_cognitive).to_dict()

        assert data["score"] == 0
        assert data["factors"] == {"cognitive": 0, "speech": 0, "behavioral": 0}
        assert data["domains_used"] == ["cognitive"]


class TestCalculatorConfig:
    """Tests for CalculatorConfig."""

    def test_default_weight_groups_sum_to_one(self):
        """Test every default weight group sums to 1.0."""
        for weights in CalculatorConfig().weight_groups.values():
            assert sum(weights.values()) == pytest.approx(1.0)

    def test_references_must_be_positive(self):
        """Test zero references are rejected."""
        with pytest.raises(ValueError):
            CalculatorConfig(memory_reference=0)
