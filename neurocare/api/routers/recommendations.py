"""
Recommendation API endpoints.

Routes:
- GET /recommendations - Per-session recommendations with citations

Dependencies: neurocare.application.services, neurocare.models
System role: Recommendation HTTP API
"""

from fastapi import APIRouter, Depends

from neurocare.api.deps import get_current_user, get_therapy_session_service
from neurocare.application.services import TherapySessionService
from neurocare.models.recommendation import RecommendationReport

from .error_handling import handle_domain_errors

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.get("", response_model=RecommendationReport)
@handle_domain_errors("get recommendations")
async def get_recommendations(
    user_id: str = Depends(get_current_user),
    service: TherapySessionService = Depends(get_therapy_session_service),
) -> RecommendationReport:
    """
    Recommend frequency and duration from the user's session history.

    Returns:
        RecommendationReport: Empty (no citations) when there is no history
    """
    return await service.get_recommendations(user_id)
