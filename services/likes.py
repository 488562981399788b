from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.Review import Review
from models.ReviewLike import ReviewLike
from services.social_graph import get_user_or_404
from utils.errors import NotFoundError, ValidationFailedError
from utils.logger import get_logger

logger = get_logger("likes")


def count_likes(db: Session, review_id: int) -> int:
    # derived on every read, never stored
    return db.query(func.count(ReviewLike.id)).filter(ReviewLike.review_id == review_id).scalar() or 0


def find_like(db: Session, user_id: str, review_id: int) -> Optional[ReviewLike]:
    return db.query(ReviewLike).filter(
        ReviewLike.user_id == user_id,
        ReviewLike.review_id == review_id
    ).first()


def like_review(db: Session, user_id: str, review_id: int) -> int:
    """Like a review (own reviews included) and return its like count."""
    get_user_or_404(db, user_id, "User profile not found")

    review = db.query(Review.id).filter(Review.id == review_id).first()
    if not review:
        raise NotFoundError("Review not found")

    if find_like(db, user_id, review_id):
        raise ValidationFailedError("Review already liked")

    try:
        db.add(ReviewLike(user_id=user_id, review_id=review_id))
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationFailedError("Review already liked")

    logger.info("User %s liked review %s", user_id, review_id)
    return count_likes(db, review_id)


def unlike_review(db: Session, user_id: str, review_id: int) -> int:
    """Remove the user's like and return the review's like count."""
    deleted = db.query(ReviewLike).filter(
        ReviewLike.user_id == user_id,
        ReviewLike.review_id == review_id
    ).delete(synchronize_session=False)

    if not deleted:
        db.rollback()
        raise NotFoundError("Review not liked")

    db.commit()
    logger.info("User %s unliked review %s", user_id, review_id)
    return count_likes(db, review_id)
