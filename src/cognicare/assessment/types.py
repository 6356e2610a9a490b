"""Types and data models for assessment records.

Defines the persisted records (assessment results, user profiles,
baselines, risk scores) and the derived metrics consumed by the risk
calculator.
"""

from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any, Literal
from uuid import UUID

from pydantic import AfterValidator, BaseModel, Field, model_validator
from uuid_utils.compat import uuid7

# =============================================================================
# Enums
# =============================================================================


class AssessmentType(str, Enum):
    """Type of completed assessment."""

    MEMORY = "memory"
    ATTENTION = "attention"
    VISUOSPATIAL = "visuospatial"
    SPEECH = "speech"
    BEHAVIORAL = "behavioral"


COGNITIVE_DOMAINS: tuple[AssessmentType, ...] = (
    AssessmentType.MEMORY,
    AssessmentType.ATTENTION,
    AssessmentType.VISUOSPATIAL,
)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


# =============================================================================
# Derived Metrics
# =============================================================================


@dataclass(frozen=True)
class CognitiveMetrics:
    """Normalized cognitive performance, each conceptually 0-100."""

    memory_score: float
    attention_score: float
    visuospatial_score: float
    processing_speed: float
    executive_function: float

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return asdict(self)


class SpeechMetrics(BaseModel):
    """Speech quality metrics derived from a transcript, each intended 0-100.

    A pydantic model rather than a dataclass because it is embedded in
    stored speech assessment details.
    """

    model_config = {"frozen": True}

    fluency: float = Field(default=0.0, ge=0)
    coherence: float = Field(default=0.0, ge=0)
    vocabulary_diversity: float = Field(default=0.0, ge=0)
    pause_frequency: float = Field(default=0.0, ge=0)
    articulation: float = Field(default=0.0, ge=0)

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return self.model_dump()


@dataclass(frozen=True)
class BehavioralMetrics:
    """Behavioral pattern metrics, each conceptually 0-100."""

    activity_level: float
    sleep_pattern: float
    social_interaction: float
    routine_adherence: float

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary."""
        return asdict(self)


# =============================================================================
# Assessment Details
# =============================================================================


class MemoryDetails(BaseModel):
    """Shopping-list recall and paired-associate results."""

    type: Literal["memory"] = "memory"
    shopping_score: int = Field(default=0, ge=0)
    pairs_score: int = Field(default=0, ge=0)
    shopping_items: int = Field(default=0, ge=0)
    pairs_items: int = Field(default=0, ge=0)


class AttentionDetails(BaseModel):
    """Trail-making and Stroop results."""

    type: Literal["attention"] = "attention"
    trail_score: float = Field(default=0.0, ge=0)
    stroop_score: int = Field(default=0, ge=0)
    trail_errors: int = Field(default=0, ge=0)
    avg_reaction_time_ms: float | None = None
    trail_completion_time_ms: float | None = None


class VisuospatialDetails(BaseModel):
    """Puzzle, pattern and mental rotation results."""

    type: Literal["visuospatial"] = "visuospatial"
    puzzle_score: float = Field(default=0.0, ge=0)
    pattern_score: int = Field(default=0, ge=0)
    rotation_score: int = Field(default=0, ge=0)
    puzzle_completion_time_ms: float | None = None
    total_tests: int = 3


class SpeechTaskResult(BaseModel):
    """One recorded speech task."""

    task_id: str
    category: str | None = None
    duration_ms: float = Field(default=0.0, ge=0)
    words_spoken: int = Field(default=0, ge=0)
    pause_count: int = Field(default=0, ge=0)
    score: float = Field(default=0.0, ge=0)


class SpeechDetails(BaseModel):
    """Speech task summary plus transcript-derived metrics, if analyzed."""

    type: Literal["speech"] = "speech"
    tasks: list[SpeechTaskResult] = Field(default_factory=list)
    fluency_score: float = 0.0
    description_score: float = 0.0
    total_words: int = 0
    avg_pauses: float = 0.0
    metrics: SpeechMetrics | None = None


class BehavioralDetails(BaseModel):
    """Behavioral pattern scores at the time of the assessment."""

    type: Literal["behavioral"] = "behavioral"
    activity_score: float = 75.0
    social_score: float = 70.0
    circadian_score: float = 75.0
    typing_score: float = 75.0
    routine_score: float = 50.0
    overall_score: float = 0.0
    insights: list[str] = Field(default_factory=list)
    risk_factors: list[str] = Field(default_factory=list)


AssessmentDetails = Annotated[
    MemoryDetails | AttentionDetails | VisuospatialDetails | SpeechDetails | BehavioralDetails,
    Field(discriminator="type"),
]


# =============================================================================
# Records
# =============================================================================


class AssessmentResult(BaseModel):
    """One completed assessment.

    Created once when a test finishes and never modified afterwards.

    Attributes:
        id: Unique identifier for this result.
        user_id: User who completed the assessment.
        type: Assessment domain.
        score: Points achieved.
        max_score: Points available; 0 marks a degenerate record.
        duration_ms: Time taken in milliseconds.
        details: Per-type diagnostic payload.
        completed_at: When the assessment finished.
    """

    model_config = {"frozen": True}

    id: UUID = Field(default_factory=uuid7)
    user_id: str
    type: AssessmentType
    score: float = Field(ge=0)
    max_score: float = Field(ge=0)
    duration_ms: float = Field(default=0.0, ge=0)
    details: AssessmentDetails | None = None
    completed_at: UtcDatetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def _check_details_type(self) -> "AssessmentResult":
        if self.details is not None and self.details.type != self.type.value:
            raise ValueError(
                f"details of type {self.details.type!r} do not match assessment type "
                f"{self.type.value!r}"
            )
        return self

    @property
    def percentage(self) -> float | None:
        """Score as a percentage of max_score, None for degenerate records."""
        if self.max_score <= 0:
            return None
        return self.score / self.max_score * 100


class CognitiveBaseline(BaseModel):
    """First-established reference cognitive scores for a user.

    Records created by the screening flow carry only the three measured
    domains; processing speed and executive function are optional.
    """

    model_config = {"frozen": True}

    memory_score: float
    attention_score: float
    visuospatial_score: float
    processing_speed: float | None = None
    executive_function: float | None = None
    established_at: UtcDatetime = Field(default_factory=utc_now)

    @classmethod
    def from_metrics(
        cls, metrics: CognitiveMetrics, established_at: datetime | None = None
    ) -> "CognitiveBaseline":
        """Snapshot the measured domains of a metrics record."""
        return cls(
            memory_score=metrics.memory_score,
            attention_score=metrics.attention_score,
            visuospatial_score=metrics.visuospatial_score,
            established_at=established_at or utc_now(),
        )


class EmergencyContact(BaseModel):
    """Emergency contact on a user profile."""

    name: str
    phone: str
    relationship: str


class UserProfile(BaseModel):
    """A screened user."""

    id: str
    name: str
    age: int = Field(ge=0)
    email: str | None = None
    phone: str | None = None
    emergency_contact: EmergencyContact | None = None
    medical_history: list[str] = Field(default_factory=list)
    cognitive_baseline: CognitiveBaseline | None = None
    created_at: UtcDatetime = Field(default_factory=utc_now)
    updated_at: UtcDatetime = Field(default_factory=utc_now)


class RiskFactors(BaseModel):
    """Per-domain risk scores, 0 for domains that were not scored."""

    cognitive: int = 0
    speech: int = 0
    behavioral: int = 0


class DementiaRiskScore(BaseModel):
    """One scoring event for a user.

    Appended to the user's history; the latest entry is the current score.
    """

    model_config = {"frozen": True}

    id: UUID = Field(default_factory=uuid7)
    user_id: str
    score: int = Field(ge=0, le=100)
    confidence: int = Field(ge=0, le=100)
    factors: RiskFactors = Field(default_factory=RiskFactors)
    recommendations: list[str] = Field(default_factory=list)
    generated_at: UtcDatetime = Field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")
