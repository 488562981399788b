from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_db
from schemas import UserCreate, UserRead, UserProfileResponse, MessageResponse
from services import users as user_service
from services.auth_service import get_current_user_id

router = APIRouter(prefix="/api", tags=["Users"])


@router.post(
    "/users",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
)
def create_user(
    payload: UserCreate,
    current_user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Register the profile of the authenticated user.
    """
    return user_service.register_user(db, current_user_id, payload)


@router.get(
    "/user/{user_id}",
    response_model=UserProfileResponse,
    response_model_exclude_unset=True,
)
def get_user_profile(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Get a user profile with follow status. Email is only returned on your own profile.
    """
    profile = user_service.get_profile(db, current_user_id, user_id)
    return {"user": profile}


@router.delete("/user/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Delete your own account. Reviews, likes and follow edges go with it.
    """
    user_service.delete_account(db, current_user_id, user_id)
    return {"message": "Account deleted successfully"}
