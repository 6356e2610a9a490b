"""Storage for profiles, assessments and risk scores."""

from cognicare.storage.store import (
    AssessmentStore,
    InMemoryAssessmentStore,
    create_assessment_store,
)

__all__ = [
    "AssessmentStore",
    "InMemoryAssessmentStore",
    "create_assessment_store",
]
