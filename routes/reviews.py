from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_db
from schemas import ReviewCreate, ReviewUpdate, ReviewRead, LikeResponse, MessageResponse
from services import likes, reviews
from services.auth_service import get_current_user_id, get_optional_user_id

router = APIRouter(prefix="/api/reviews", tags=["Reviews"])


@router.get("", response_model=List[ReviewRead])
def get_reviews(
    race_id: Optional[int] = Query(None, alias="raceId"),
    current_user_id: Optional[str] = Depends(get_optional_user_id),
    db: Session = Depends(get_db)
):
    """
    Get all reviews, newest first, optionally for a single race.
    """
    return reviews.list_reviews(db, current_user_id, race_id)


@router.get("/{review_id}", response_model=ReviewRead)
def get_review(
    review_id: int,
    current_user_id: Optional[str] = Depends(get_optional_user_id),
    db: Session = Depends(get_db)
):
    return reviews.get_review(db, review_id, current_user_id)


@router.post("", response_model=ReviewRead, status_code=status.HTTP_201_CREATED)
def create_review(
    payload: ReviewCreate,
    current_user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Review a race. One review per user per race.
    """
    return reviews.create_review(db, current_user_id, payload)


@router.put("/{review_id}", response_model=ReviewRead)
def update_review(
    review_id: int,
    payload: ReviewUpdate,
    current_user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Update the rating and/or text of your own review.
    """
    return reviews.update_review(db, current_user_id, review_id, payload)


@router.delete("/{review_id}", response_model=MessageResponse)
def delete_review(
    review_id: int,
    current_user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Delete your own review (its likes go with it).
    """
    reviews.delete_review(db, current_user_id, review_id)
    return {"message": "Review deleted successfully"}


# ---------- Likes ----------

@router.post("/{review_id}/like", response_model=LikeResponse)
def like_review(
    review_id: int,
    current_user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    like_count = likes.like_review(db, current_user_id, review_id)
    return {"message": "Review liked successfully", "like_count": like_count}


@router.delete("/{review_id}/like", response_model=LikeResponse)
def unlike_review(
    review_id: int,
    current_user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    like_count = likes.unlike_review(db, current_user_id, review_id)
    return {"message": "Review unliked successfully", "like_count": like_count}
