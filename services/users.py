from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import utcnow
from models.User import User
from schemas import UserCreate
from services.social_graph import detach_user, get_user_or_404, is_following
from utils.errors import ConflictError, ForbiddenError
from utils.logger import get_logger

logger = get_logger("users")


def register_user(db: Session, user_id: str, payload: UserCreate) -> User:
    exists = db.query(User).filter(
        or_(User.id == user_id, User.email == payload.email)
    ).first()
    if exists:
        raise ConflictError("User id or email already registered")

    new_user = User(
        id=user_id,
        name=payload.name,
        email=payload.email,
        image=payload.image,
    )
    try:
        db.add(new_user)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("User id or email already registered")
    db.refresh(new_user)
    logger.info("Registered user %s", user_id)
    return new_user


def get_profile(db: Session, viewer_id: str, user_id: str) -> dict:
    user = get_user_or_404(db, user_id)

    profile = {
        "id": user.id,
        "name": user.name,
        "image": user.image,
        "follower_count": user.follower_count,
        "following_count": user.following_count,
        "created_at": user.created_at,
        "is_following": is_following(db, viewer_id, user_id),
    }
    # email stays private to its owner
    if viewer_id == user_id:
        profile["email"] = user.email
    return profile


def delete_account(db: Session, actor_id: str, user_id: str) -> None:
    if actor_id != user_id:
        raise ForbiddenError()

    user = get_user_or_404(db, user_id)
    detach_user(db, user_id)
    db.delete(user)
    db.commit()
    logger.info("Account deleted: userId=%s, deletedAt=%s", user_id, utcnow().isoformat())
