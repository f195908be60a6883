"""
Project recommendation endpoint.
"""

from fastapi import APIRouter, Depends, Query

from teamup.services import MatchmakingService

from ..dependencies import get_matchmaking_service
from ..schemas import MatchmakingResponse

router = APIRouter(prefix="/matchmaking", tags=["matchmaking"])


@router.get("", response_model=MatchmakingResponse)
def get_recommendations(
    user_id: int | None = Query(default=None),
    service: MatchmakingService = Depends(get_matchmaking_service),
):
    """Top open projects for a user, best match first."""
    result = service.recommend(user_id)
    return MatchmakingResponse(
        recommendations=[r.to_dict() for r in result.recommendations],
        user_skills=result.user_skills,
        message=result.reason,
    )
