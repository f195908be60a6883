"""
Analytics endpoint: per-user and per-project aggregates.
"""

from fastapi import APIRouter, Depends, Query

from teamup.exceptions import ValidationError
from teamup.services import AnalyticsService

from ..dependencies import get_analytics_service
from ..schemas import AnalyticsResponse
from ..serializers import serialize_analytics

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsResponse)
def get_analytics(
    user_id: int | None = Query(default=None),
    project_id: int | None = Query(default=None),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """User analytics, project analytics, or both when both ids are given."""
    if user_id is None and project_id is None:
        raise ValidationError("User ID or Project ID is required")
    return AnalyticsResponse(
        analytics=serialize_analytics(
            user=service.user_analytics(user_id) if user_id is not None else None,
            project=service.project_analytics(project_id) if project_id is not None else None,
        )
    )
