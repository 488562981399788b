from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_db
from schemas import FeedPage, SuggestionsResponse
from services import feed
from services.auth_service import get_current_user_id
from utils.pagination import DEFAULT_SUGGESTION_LIMIT, PageParams, clamp_limit, page_params, pagination_meta

router = APIRouter(prefix="/api", tags=["Feed"])


@router.get("/feed/following", response_model=FeedPage)
def get_following_feed(
    params: PageParams = Depends(page_params),
    current_user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Get reviews written by the users you follow, newest first.
    Empty when you are not following anyone.
    """
    items, total = feed.following_feed(db, current_user_id, params)
    return {"reviews": items, "pagination": pagination_meta(params, total)}


@router.get("/users/suggestions", response_model=SuggestionsResponse)
def get_user_suggestions(
    limit: int = Query(DEFAULT_SUGGESTION_LIMIT),
    current_user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db)
):
    """
    Suggest active reviewers you are not following yet.
    """
    suggestions = feed.suggested_users(db, current_user_id, clamp_limit(limit))
    return {"suggestions": suggestions, "total": len(suggestions)}
