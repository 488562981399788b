from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_db
from schemas import FollowersPage, FollowingPage, MessageResponse
from services import social_graph
from services.auth_service import get_current_user_id
from utils.pagination import PageParams, page_params, pagination_meta

router = APIRouter(prefix="/api/users", tags=["Follows"])


@router.post("/{user_id}/follow", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def follow_user(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Follow a user.
    """
    social_graph.follow_user(db, current_user_id, user_id)
    return {"message": "Successfully followed user"}


@router.delete("/{user_id}/follow", response_model=MessageResponse)
def unfollow_user(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Unfollow a user.
    """
    social_graph.unfollow_user(db, current_user_id, user_id)
    return {"message": "Successfully unfollowed user"}


@router.get("/{user_id}/followers", response_model=FollowersPage)
def get_followers(
    user_id: str,
    params: PageParams = Depends(page_params),
    current_user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Get the users that follow a user, most recent first.
    """
    followers, total = social_graph.list_followers(db, user_id, params)
    return {"followers": followers, "pagination": pagination_meta(params, total)}


@router.get("/{user_id}/following", response_model=FollowingPage)
def get_following(
    user_id: str,
    params: PageParams = Depends(page_params),
    current_user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Get the users a user is following, most recent first.
    """
    following, total = social_graph.list_following(db, user_id, params)
    return {"following": following, "pagination": pagination_meta(params, total)}
