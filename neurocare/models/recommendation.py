"""
Recommendation domain models.

Derived, never persisted. Each SessionRecommendation is computed from exactly
one SessionRecord.

Dependencies: pydantic
System role: Recommendation API contracts
"""

from pydantic import BaseModel, ConfigDict, Field

from neurocare.models.citation import Citation


class SessionRecommendation(BaseModel):
    """Suggested frequency and duration derived from one past session."""

    model_config = ConfigDict(frozen=True)

    session_number: int = Field(ge=1, description="1-based rank, newest session first")
    session_date: str = Field(description="Calendar date of the source session")
    frequency: int = Field(ge=40, le=166, description="Vibration frequency in Hz")
    duration: int = Field(ge=1, le=30, description="Session length in minutes")
    justification: str


class RecommendationReport(BaseModel):
    """Recommendations with the references that back them."""

    recommendations: list[SessionRecommendation] = Field(default_factory=list)
    citations: list[Citation] = Field(default_factory=list)
