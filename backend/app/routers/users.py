"""
User account endpoints.
"""

from fastapi import APIRouter, Depends, status

from teamup.services import UserService

from ..dependencies import get_user_service
from ..schemas import UserCreateRequest, UserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreateRequest,
    service: UserService = Depends(get_user_service),
):
    return service.create_user(
        name=payload.name,
        email=payload.email,
        bio=payload.bio,
        avatar_url=payload.avatar_url,
    )


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return service.get_user(user_id)
