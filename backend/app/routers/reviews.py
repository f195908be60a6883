"""
Peer review endpoints.
"""

from fastapi import APIRouter, Depends, Query, status

from teamup.services import ReviewService

from ..dependencies import get_review_service
from ..schemas import ReviewCreateRequest, ReviewListResponse, ReviewMutationResponse
from ..serializers import serialize_review

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("", response_model=ReviewListResponse)
def list_reviews(
    project_id: int | None = Query(default=None),
    task_id: int | None = Query(default=None),
    reviewee_id: int | None = Query(default=None),
    service: ReviewService = Depends(get_review_service),
):
    reviews = service.list_reviews(project_id=project_id, task_id=task_id, reviewee_id=reviewee_id)
    return ReviewListResponse(reviews=[serialize_review(r) for r in reviews])


@router.post("", response_model=ReviewMutationResponse, status_code=status.HTTP_201_CREATED)
def submit_review(payload: ReviewCreateRequest, service: ReviewService = Depends(get_review_service)):
    review = service.submit_review(
        reviewer_id=payload.reviewer_id,
        reviewee_id=payload.reviewee_id,
        rating=payload.rating,
        project_id=payload.project_id,
        task_id=payload.task_id,
        comments=payload.comments,
        anonymous=payload.anonymous,
    )
    return ReviewMutationResponse(
        message="Review submitted successfully", review=serialize_review(review)
    )
