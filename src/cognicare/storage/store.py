"""Per-user storage for profiles, assessments and risk scores.

Assessments and risk scores are append-only histories kept in insertion
order; the last risk score appended is the user's current score.
"""

import json
from typing import Any, Protocol

from cognicare.assessment.types import (
    AssessmentResult,
    CognitiveBaseline,
    DementiaRiskScore,
    UserProfile,
    utc_now,
)
from cognicare.core.logging import get_logger
from cognicare.utils.exceptions import UserNotFoundError

logger = get_logger(__name__)


class AssessmentStore(Protocol):
    """Protocol for screening data storage backends."""

    def save_profile(self, profile: UserProfile) -> None:
        """Create or replace a user profile."""
        ...

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Load a user profile."""
        ...

    def list_users(self) -> list[UserProfile]:
        """List all user profiles."""
        ...

    def set_cognitive_baseline(self, user_id: str, baseline: CognitiveBaseline) -> bool:
        """Record a baseline unless one already exists."""
        ...

    def append_assessment(self, result: AssessmentResult) -> None:
        """Append a completed assessment."""
        ...

    def list_assessments(self, user_id: str) -> list[AssessmentResult]:
        """List a user's assessments in insertion order."""
        ...

    def append_risk_score(self, risk_score: DementiaRiskScore) -> None:
        """Append a risk score."""
        ...

    def list_risk_scores(self, user_id: str) -> list[DementiaRiskScore]:
        """List a user's risk scores in insertion order."""
        ...

    def latest_risk_score(self, user_id: str) -> DementiaRiskScore | None:
        """Most recently appended risk score."""
        ...

    def clear_user_data(self, user_id: str) -> None:
        """Remove everything stored for a user."""
        ...

    def export_user_data(self, user_id: str) -> str:
        """Export a user's records as a JSON document."""
        ...


class InMemoryAssessmentStore:
    """In-memory screening data storage.

    Example:
        store = InMemoryAssessmentStore()
        store.save_profile(profile)
        store.append_assessment(result)
        print(store.export_user_data(profile.id))
    """

    def __init__(self) -> None:
        """Initialize storage."""
        self._profiles: dict[str, UserProfile] = {}
        self._assessments: dict[str, list[AssessmentResult]] = {}
        self._risk_scores: dict[str, list[DementiaRiskScore]] = {}

    def save_profile(self, profile: UserProfile) -> None:
        """Create or replace a user profile."""
        self._profiles[profile.id] = profile

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Load a user profile."""
        return self._profiles.get(user_id)

    def list_users(self) -> list[UserProfile]:
        """List all user profiles in creation order."""
        return list(self._profiles.values())

    def set_cognitive_baseline(self, user_id: str, baseline: CognitiveBaseline) -> bool:
        """Record a baseline unless one already exists.

        Args:
            user_id: User to update.
            baseline: Baseline to record.

        Returns:
            True if the baseline was recorded, False if one already existed.

        Raises:
            UserNotFoundError: If the user has no profile.
        """
        profile = self._profiles.get(user_id)
        if profile is None:
            raise UserNotFoundError(user_id)
        if profile.cognitive_baseline is not None:
            return False

        self._profiles[user_id] = profile.model_copy(
            update={"cognitive_baseline": baseline, "updated_at": utc_now()}
        )
        logger.info("Cognitive baseline established", user_id=user_id)
        return True

    def append_assessment(self, result: AssessmentResult) -> None:
        """Append a completed assessment."""
        self._assessments.setdefault(result.user_id, []).append(result)

    def list_assessments(self, user_id: str) -> list[AssessmentResult]:
        """List a user's assessments in insertion order."""
        return list(self._assessments.get(user_id, []))

    def append_risk_score(self, risk_score: DementiaRiskScore) -> None:
        """Append a risk score."""
        self._risk_scores.setdefault(risk_score.user_id, []).append(risk_score)

    def list_risk_scores(self, user_id: str) -> list[DementiaRiskScore]:
        """List a user's risk scores in insertion order."""
        return list(self._risk_scores.get(user_id, []))

    def latest_risk_score(self, user_id: str) -> DementiaRiskScore | None:
        """Most recently appended risk score."""
        scores = self._risk_scores.get(user_id)
        return scores[-1] if scores else None

    def clear_user_data(self, user_id: str) -> None:
        """Remove the profile, assessments and risk scores of a user."""
        self._profiles.pop(user_id, None)
        self._assessments.pop(user_id, None)
        self._risk_scores.pop(user_id, None)
        logger.info("User data cleared", user_id=user_id)

    def export_user_data(self, user_id: str) -> str:
        """Export a user's records for a clinician.

        Args:
            user_id: User to export.

        Returns:
            Indented JSON with profile (null when missing), assessments,
            risk_scores and exported_at.
        """
        profile = self.get_profile(user_id)
        document: dict[str, Any] = {
            "profile": profile.model_dump(mode="json") if profile else None,
            "assessments": [a.model_dump(mode="json") for a in self.list_assessments(user_id)],
            "risk_scores": [r.to_dict() for r in self.list_risk_scores(user_id)],
            "exported_at": utc_now().isoformat(),
        }
        return json.dumps(document, indent=2)


def create_assessment_store() -> InMemoryAssessmentStore:
    """Create an empty in-memory store."""
    return InMemoryAssessmentStore()
