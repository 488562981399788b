from typing import List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.Follow import Follow
from models.User import User
from utils.errors import ConflictError, NotFoundError, ValidationFailedError
from utils.logger import get_logger
from utils.pagination import PageParams

logger = get_logger("social")


def get_user_or_404(db: Session, user_id: str, message: str = "User not found") -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError(message)
    return user


def find_follow(db: Session, actor_id: str, target_id: str) -> Optional[Follow]:
    return db.query(Follow).filter(
        Follow.user_id == actor_id,
        Follow.following_id == target_id
    ).first()


def is_following(db: Session, actor_id: str, target_id: str) -> bool:
    if actor_id == target_id:
        return False
    return find_follow(db, actor_id, target_id) is not None


def _shift_counters(db: Session, actor_id: str, target_id: str, delta: int) -> None:
    """Adjust both ends of an edge with SQL-side arithmetic (no read-modify-write)."""
    actor_query = db.query(User).filter(User.id == actor_id)
    target_query = db.query(User).filter(User.id == target_id)
    if delta < 0:
        # never drive a counter below zero
        actor_query = actor_query.filter(User.following_count > 0)
        target_query = target_query.filter(User.follower_count > 0)

    actor_query.update({User.following_count: User.following_count + delta}, synchronize_session=False)
    target_query.update({User.follower_count: User.follower_count + delta}, synchronize_session=False)


def follow_user(db: Session, actor_id: str, target_id: str) -> Follow:
    """
    Create the edge actor -> target and bump both counters in one transaction.

    The unique constraint on (user_id, following_id) is the backstop for two
    concurrent follows slipping past the existence check: the loser is rolled
    back whole, counters included, and reported as a conflict.
    """
    if actor_id == target_id:
        raise ValidationFailedError("Cannot follow yourself")

    get_user_or_404(db, actor_id, "User profile not found")
    get_user_or_404(db, target_id)

    if find_follow(db, actor_id, target_id):
        raise ConflictError("Already following this user")

    new_follow = Follow(user_id=actor_id, following_id=target_id)
    try:
        db.add(new_follow)
        db.flush()
        _shift_counters(db, actor_id, target_id, 1)
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Duplicate follow rejected by constraint: %s -> %s", actor_id, target_id)
        raise ConflictError("Already following this user")

    db.refresh(new_follow)
    logger.info("User %s followed %s", actor_id, target_id)
    return new_follow


def unfollow_user(db: Session, actor_id: str, target_id: str) -> None:
    deleted = db.query(Follow).filter(
        Follow.user_id == actor_id,
        Follow.following_id == target_id
    ).delete(synchronize_session=False)

    # a concurrent unfollow may have removed the edge first; only the deleter touches counters
    if not deleted:
        db.rollback()
        raise NotFoundError("Not following this user")

    _shift_counters(db, actor_id, target_id, -1)
    db.commit()
    logger.info("User %s unfollowed %s", actor_id, target_id)


def _relationship_page(db: Session, user_id: str, params: PageParams, followers: bool) -> Tuple[List[dict], int]:
    get_user_or_404(db, user_id)

    if followers:
        joined_on, owner_column = Follow.user_id, Follow.following_id
    else:
        joined_on, owner_column = Follow.following_id, Follow.user_id

    rows = (
        db.query(User, Follow.created_at.label("followed_at"))
        .join(Follow, joined_on == User.id)
        .filter(owner_column == user_id)
        .order_by(desc(Follow.created_at), desc(Follow.id))
        .offset(params.offset)
        .limit(params.limit)
        .all()
    )
    total = db.query(func.count(Follow.id)).filter(owner_column == user_id).scalar() or 0

    users = [
        {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "image": user.image,
            "follower_count": user.follower_count,
            "following_count": user.following_count,
            "followed_at": followed_at,
        }
        for user, followed_at in rows
    ]
    return users, total


def list_followers(db: Session, user_id: str, params: PageParams) -> Tuple[List[dict], int]:
    """Users following ``user_id``, most recent relationship first."""
    return _relationship_page(db, user_id, params, followers=True)


def list_following(db: Session, user_id: str, params: PageParams) -> Tuple[List[dict], int]:
    """Users ``user_id`` follows, most recent relationship first."""
    return _relationship_page(db, user_id, params, followers=False)


def detach_user(db: Session, user_id: str) -> None:
    """
    Decrement the counters on the far side of every edge touching ``user_id``.

    Called inside the account-deletion transaction, before the cascade removes
    the edges themselves. Does not commit.
    """
    followed_ids = select(Follow.following_id).where(Follow.user_id == user_id)
    follower_ids = select(Follow.user_id).where(Follow.following_id == user_id)

    db.query(User).filter(User.id.in_(followed_ids), User.follower_count > 0).update(
        {User.follower_count: User.follower_count - 1}, synchronize_session=False
    )
    db.query(User).filter(User.id.in_(follower_ids), User.following_count > 0).update(
        {User.following_count: User.following_count - 1}, synchronize_session=False
    )
