"""
Profile management endpoints.
"""

from fastapi import APIRouter, Depends

from teamup.services import ProfileService, SkillInput

from ..dependencies import get_profile_service
from ..schemas import ProfileResponse, ProfileUpdateRequest
from ..serializers import serialize_profile

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/{user_id}", response_model=ProfileResponse)
def get_profile(user_id: int, service: ProfileService = Depends(get_profile_service)):
    """User details, declared skills and project memberships."""
    return serialize_profile(service.get_profile(user_id))


@router.put("/{user_id}", response_model=ProfileResponse)
def update_profile(
    user_id: int,
    payload: ProfileUpdateRequest,
    service: ProfileService = Depends(get_profile_service),
):
    """
    Update profile fields.

    When `skills` is present it replaces the whole skill list; omit it to keep
    the current skills.
    """
    skills = None
    if payload.skills is not None:
        skills = [SkillInput(s.name, s.proficiency, s.category) for s in payload.skills]

    profile = service.update_profile(
        user_id,
        name=payload.name,
        bio=payload.bio,
        avatar_url=payload.avatar_url,
        skills=skills,
    )
    return serialize_profile(profile)
