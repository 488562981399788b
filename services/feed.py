from typing import List, Tuple

from sqlalchemy import and_, asc, desc, distinct, func
from sqlalchemy.orm import Session

from models.Follow import Follow
from models.Race import Race
from models.Review import Review
from models.User import User
from services.reviews import annotated_reviews, to_review_dict
from utils.pagination import PageParams


def following_feed(db: Session, viewer_id: str, params: PageParams) -> Tuple[List[dict], int]:
    """
    Reviews written by users the viewer follows, newest first.

    Likes are left-joined so a review nobody liked still shows up with a zero
    count; the count is distinct so the extra joins cannot inflate it.
    """
    rows = (
        annotated_reviews(db, viewer_id, Race)
        .join(Race, Review.race_id == Race.id)
        .join(Follow, Follow.following_id == Review.user_id)
        .filter(Follow.user_id == viewer_id)
        .offset(params.offset)
        .limit(params.limit)
        .all()
    )

    # same join conditions as above, without the like aggregation
    total = (
        db.query(func.count(Review.id))
        .join(Follow, Follow.following_id == Review.user_id)
        .filter(Follow.user_id == viewer_id)
        .scalar()
    ) or 0

    reviews = []
    for review, author, race, like_count, liked in rows:
        item = to_review_dict(review, author, like_count, liked)
        item["race_name"] = race.name
        item["race_slug"] = race.slug
        reviews.append(item)
    return reviews, total


def suggested_users(db: Session, viewer_id: str, limit: int) -> List[dict]:
    """
    Reviewers the viewer does not follow yet, most prolific first.

    Ranking: review count desc, latest review desc, then user id asc so ties
    come back in a stable order.
    """
    review_count = func.count(distinct(Review.id)).label("review_count")
    latest_review = func.max(Review.created_at).label("latest_review_date")

    rows = (
        db.query(User, review_count, latest_review)
        .join(Review, Review.user_id == User.id)
        .outerjoin(Follow, and_(Follow.user_id == viewer_id, Follow.following_id == User.id))
        .filter(User.id != viewer_id, Follow.id.is_(None))
        .group_by(User.id)
        .order_by(desc(review_count), desc(latest_review), asc(User.id))
        .limit(limit)
        .all()
    )

    return [
        {
            "id": user.id,
            "name": user.name or "Anonymous",
            "email": user.email,
            "image": user.image or "",
            "follower_count": user.follower_count or 0,
            "following_count": user.following_count or 0,
            "review_count": count or 0,
            "latest_review_date": latest,
        }
        for user, count, latest in rows
    ]
