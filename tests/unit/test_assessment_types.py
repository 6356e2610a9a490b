"""Unit tests for assessment records and metrics types."""

from datetime import UTC, datetime
from uuid import UUID

import pytest
from pydantic import ValidationError

from cognicare.assessment.types import (
    AssessmentResult,
    AssessmentType,
    BehavioralDetails,
    CognitiveBaseline,
    CognitiveMetrics,
    DementiaRiskScore,
    MemoryDetails,
    RiskFactors,
    SpeechDetails,
    SpeechMetrics,
    UserProfile,
)


class TestAssessmentResult:
    """Tests for AssessmentResult."""

    def test_defaults(self):
        """Test id and completion time are generated."""
        result = AssessmentResult(
            user_id="user-1", type=AssessmentType.MEMORY, score=8, max_score=10
        )

        assert isinstance(result.id, UUID)
        assert result.completed_at.tzinfo is not None
        assert result.details is None
        assert result.duration_ms == 0.0

    def test_percentage(self):
        """Test percentage of max score."""
        result = AssessmentResult(
            user_id="user-1", type=AssessmentType.ATTENTION, score=3, max_score=4
        )
        assert result.percentage == pytest.approx(75.0)

    def test_percentage_none_for_zero_max(self):
        """Test degenerate records have no percentage."""
        result = AssessmentResult(
            user_id="user-1", type=AssessmentType.ATTENTION, score=0, max_score=0
        )
        assert result.percentage is None

    def test_offset_less_timestamp_is_utc(self):
        """Test a timestamp without an offset is read as UTC."""
        result = AssessmentResult.model_validate(
            {
                "user_id": "user-1",
                "type": "memory",
                "score": 8,
                "max_score": 10,
                "completed_at": "2025-05-20T10:00:00",
            }
        )

        assert result.completed_at == datetime(2025, 5, 20, 10, 0, tzinfo=UTC)

    def test_aware_timestamp_kept(self):
        """Test timestamps with an offset are not shifted."""
        result = AssessmentResult.model_validate(
            {
                "user_id": "user-1",
                "type": "memory",
                "score": 8,
                "max_score": 10,
                "completed_at": "2025-05-20T10:00:00+02:00",
            }
        )

        assert result.completed_at == datetime(2025, 5, 20, 8, 0, tzinfo=UTC)

    def test_negative_score_rejected(self):
        """Test scores must be non-negative."""
        with pytest.raises(ValidationError):
            AssessmentResult(
                user_id="user-1", type=AssessmentType.MEMORY, score=-1, max_score=10
            )

    def test_frozen(self):
        """Test records cannot be modified after creation."""
        result = AssessmentResult(
            user_id="user-1", type=AssessmentType.MEMORY, score=8, max_score=10
        )
        with pytest.raises(ValidationError):
            result.score = 9

    def test_details_must_match_type(self):
        """Test mismatched details are rejected."""
        with pytest.raises(ValidationError):
            AssessmentResult(
                user_id="user-1",
                type=AssessmentType.ATTENTION,
                score=8,
                max_score=10,
                details=MemoryDetails(shopping_score=4, pairs_score=4),
            )

    def test_details_parsed_from_dict(self):
        """Test the details union is discriminated by type."""
        result = AssessmentResult.model_validate(
            {
                "user_id": "user-1",
                "type": "speech",
                "score": 70,
                "max_score": 100,
                "details": {
                    "type": "speech",
                    "metrics": {"fluency": 80, "coherence": 70},
                },
            }
        )

        assert isinstance(result.details, SpeechDetails)
        assert result.details.metrics == SpeechMetrics(fluency=80, coherence=70)

    def test_json_round_trip_keeps_details(self):
        """Test a dumped record validates back to an equal record."""
        result = AssessmentResult(
            user_id="user-1",
            type=AssessmentType.BEHAVIORAL,
            score=72,
            max_score=100,
            details=BehavioralDetails(activity_score=60, insights=["ok"]),
        )

        restored = AssessmentResult.model_validate_json(result.model_dump_json())

        assert restored == result


class TestCognitiveBaseline:
    """Tests for CognitiveBaseline."""

    def test_from_metrics_copies_measured_domains(self):
        """Test only the three measured domains are recorded."""
        metrics = CognitiveMetrics(
            memory_score=80,
            attention_score=60,
            visuospatial_score=70,
            processing_speed=60,
            executive_function=70,
        )
        established = datetime(2025, 1, 1, tzinfo=UTC)

        baseline = CognitiveBaseline.from_metrics(metrics, established_at=established)

        assert baseline.memory_score == 80
        assert baseline.attention_score == 60
        assert baseline.visuospatial_score == 70
        assert baseline.processing_speed is None
        assert baseline.executive_function is None
        assert baseline.established_at == established


class TestUserProfile:
    """Tests for UserProfile."""

    def test_minimal_profile(self):
        """Test optional fields default sensibly."""
        profile = UserProfile(id="user-1", name="Ada", age=71)

        assert profile.cognitive_baseline is None
        assert profile.medical_history == []
        assert profile.emergency_contact is None

    def test_negative_age_rejected(self):
        """Test age must be non-negative."""
        with pytest.raises(ValidationError):
            UserProfile(id="user-1", name="Ada", age=-1)


class TestSpeechMetrics:
    """Tests for SpeechMetrics."""

    def test_negative_values_rejected(self):
        """Test metrics must be non-negative."""
        with pytest.raises(ValidationError):
            SpeechMetrics(pause_frequency=-100)

        with pytest.raises(ValidationError):
            SpeechDetails.model_validate({"metrics": {"fluency": -1}})


class TestDementiaRiskScore:
    """Tests for DementiaRiskScore."""

    def test_naive_datetimes_are_utc(self):
        """Test naive datetimes on stored records become UTC."""
        naive = datetime(2025, 5, 20, 10, 0)

        score = DementiaRiskScore(user_id="user-1", score=30, confidence=70, generated_at=naive)
        profile = UserProfile(id="user-1", name="Ada", age=72, created_at=naive, updated_at=naive)
        baseline = CognitiveBaseline(
            memory_score=80, attention_score=70, visuospatial_score=60, established_at=naive
        )

        expected = datetime(2025, 5, 20, 10, 0, tzinfo=UTC)
        assert score.generated_at == expected
        assert profile.created_at == expected
        assert profile.updated_at == expected
        assert baseline.established_at == expected

    def test_score_bounds(self):
        """Test scores above 100 are rejected."""
        with pytest.raises(ValidationError):
            DementiaRiskScore(user_id="user-1", score=101, confidence=70)

    def test_to_dict(self):
        """Test JSON-compatible dictionary."""
        score = DementiaRiskScore(
            user_id="user-1",
            score=42,
            confidence=90,
            factors=RiskFactors(cognitive=40, speech=48),
            recommendations=["Discuss results with primary care physician"],
        )

        data = score.to_dict()

        assert data["score"] == 42
        assert data["factors"] == {"cognitive": 40, "speech": 48, "behavioral": 0}
        assert isinstance(data["id"], str)
        assert isinstance(data["generated_at"], str)
