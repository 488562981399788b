from typing import List, Optional

from sqlalchemy import case, desc, distinct, func, literal
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from database import utcnow
from models.Race import Race
from models.Review import Review, DEFAULT_REVIEW_NUMBER, MIN_RATING, MAX_RATING
from models.ReviewLike import ReviewLike
from models.User import User
from schemas import ReviewCreate, ReviewUpdate
from services.social_graph import get_user_or_404
from utils.errors import ConflictError, ForbiddenError, NotFoundError, ValidationFailedError
from utils.logger import get_logger

logger = get_logger("reviews")


def validate_rating(rating) -> int:
    # bool is an int subclass; a JSON true is not a rating
    if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationFailedError(f"Rating must be a number between {MIN_RATING} and {MAX_RATING}")
    return rating


def like_aggregates(viewer_id: Optional[str]):
    """Distinct like count plus a liked-by-viewer flag, for queries left-joined to review_likes."""
    like_count = func.count(distinct(ReviewLike.id)).label("like_count")
    if viewer_id:
        liked = func.max(case((ReviewLike.user_id == viewer_id, 1), else_=0))
    else:
        liked = literal(0)
    return like_count, liked.label("liked_by_viewer")


def annotated_reviews(db: Session, viewer_id: Optional[str], *extra_entities) -> Query:
    """Reviews joined to their author and left-joined to likes, grouped per review."""
    like_count, liked = like_aggregates(viewer_id)
    return (
        db.query(Review, User, *extra_entities, like_count, liked)
        .join(User, Review.user_id == User.id)
        .outerjoin(ReviewLike, ReviewLike.review_id == Review.id)
        .group_by(Review.id, User.id, *[entity.id for entity in extra_entities])
        .order_by(desc(Review.created_at), desc(Review.id))
    )


def to_review_dict(review: Review, author: User, like_count: int = 0, liked: bool = False) -> dict:
    return {
        "id": review.id,
        "author": author.name or "Anonymous",
        "author_id": author.id,
        "avatar_url": author.image or "",
        "rating": review.rating,
        "text": review.comment or "",
        "date": review.created_at,
        "race_id": review.race_id,
        "like_count": like_count or 0,
        "is_liked_by_user": bool(liked),
    }


def list_reviews(db: Session, viewer_id: Optional[str] = None, race_id: Optional[int] = None) -> List[dict]:
    query = annotated_reviews(db, viewer_id)
    if race_id is not None:
        query = query.filter(Review.race_id == race_id)
    return [
        to_review_dict(review, author, like_count, liked)
        for review, author, like_count, liked in query.all()
    ]


def get_review(db: Session, review_id: int, viewer_id: Optional[str] = None) -> dict:
    row = annotated_reviews(db, viewer_id).filter(Review.id == review_id).first()
    if not row:
        raise NotFoundError("Review not found")
    review, author, like_count, liked = row
    return to_review_dict(review, author, like_count, liked)


def find_user_review(db: Session, user_id: str, race_id: int) -> Optional[Review]:
    return db.query(Review).filter(
        Review.user_id == user_id,
        Review.race_id == race_id
    ).first()


def _owned_review(db: Session, user_id: str, review_id: int, action: str) -> Review:
    review = db.query(Review).filter(Review.id == review_id).first()
    if not review:
        raise NotFoundError("Review not found")
    if review.user_id != user_id:
        raise ForbiddenError(f"Forbidden: You can only {action} your own reviews")
    return review


def create_review(db: Session, user_id: str, payload: ReviewCreate) -> dict:
    rating = validate_rating(payload.rating)
    author = get_user_or_404(db, user_id, "User profile not found")

    race = db.query(Race).filter(Race.id == payload.race_id).first()
    if not race:
        raise NotFoundError("Race not found")

    if find_user_review(db, user_id, payload.race_id):
        raise ConflictError("You have already reviewed this race")

    new_review = Review(
        user_id=user_id,
        race_id=payload.race_id,
        rating=rating,
        comment=payload.text,
        review_number=DEFAULT_REVIEW_NUMBER,
    )
    try:
        db.add(new_review)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("You have already reviewed this race")

    db.refresh(new_review)
    logger.info("User %s reviewed race %s (rating=%s)", user_id, payload.race_id, rating)
    return to_review_dict(new_review, author)


def update_review(db: Session, user_id: str, review_id: int, payload: ReviewUpdate) -> dict:
    review = _owned_review(db, user_id, review_id, "edit")

    update_data = payload.model_dump(exclude_unset=True)
    changes = {}
    if "text" in update_data:
        changes["comment"] = update_data["text"]
    if "rating" in update_data:
        changes["rating"] = validate_rating(update_data["rating"])
    if not changes:
        raise ValidationFailedError("No valid fields to update")

    # onupdate does not fire when every value is unchanged
    changes["updated_at"] = utcnow()
    for field, value in changes.items():
        setattr(review, field, value)
    db.commit()
    db.refresh(review)
    logger.info("User %s updated review %s", user_id, review_id)
    return get_review(db, review_id, user_id)


def delete_review(db: Session, user_id: str, review_id: int) -> None:
    review = _owned_review(db, user_id, review_id, "delete")
    db.delete(review)
    db.commit()
    logger.info("User %s deleted review %s", user_id, review_id)
