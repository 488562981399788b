# schemas.py (Pydantic v2, camelCase on the wire)
from pydantic import BaseModel, EmailStr, StrictInt
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime


class CamelModel(BaseModel):
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class MessageResponse(CamelModel):
    message: str


class PaginationMeta(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


# ---------- Users ----------
class UserCreate(CamelModel):
    """Profile for the uid the identity provider authenticated"""
    name: str
    email: EmailStr
    image: Optional[str] = None

class UserRead(CamelModel):
    id: str
    name: str
    email: str
    image: Optional[str] = None
    follower_count: int
    following_count: int
    created_at: datetime

class UserProfileRead(CamelModel):
    """Profile as seen by the viewer; email only present on the viewer's own profile"""
    id: str
    name: str
    email: Optional[str] = None
    image: Optional[str] = None
    follower_count: int
    following_count: int
    created_at: datetime
    is_following: bool = False

class UserProfileResponse(CamelModel):
    user: UserProfileRead


# ---------- Follows ----------
class UserSummary(CamelModel):
    id: str
    name: str
    email: str
    image: Optional[str] = None
    follower_count: int
    following_count: int
    followed_at: datetime

class FollowersPage(CamelModel):
    followers: List[UserSummary]
    pagination: PaginationMeta

class FollowingPage(CamelModel):
    following: List[UserSummary]
    pagination: PaginationMeta


# ---------- Races ----------
class RaceRead(CamelModel):
    id: int
    slug: str
    name: str
    latest_race: bool
    highlights_url: Optional[str] = None

class RaceResponse(CamelModel):
    race: RaceRead


# ---------- Reviews ----------
class ReviewCreate(CamelModel):
    race_id: int
    rating: StrictInt
    text: Optional[str] = None

class ReviewUpdate(CamelModel):
    """Partial update; at least one field must be sent"""
    rating: Optional[StrictInt] = None
    text: Optional[str] = None

class ReviewRead(CamelModel):
    id: int
    author: str
    author_id: str
    avatar_url: str = ""
    rating: int
    text: str = ""
    date: datetime
    race_id: int
    like_count: int = 0
    is_liked_by_user: bool = False

class LikeResponse(CamelModel):
    message: str
    like_count: int


# ---------- Feed ----------
class FeedReviewRead(ReviewRead):
    race_name: str
    race_slug: str

class FeedPage(CamelModel):
    reviews: List[FeedReviewRead]
    pagination: PaginationMeta

class SuggestedUserRead(CamelModel):
    id: str
    name: str
    email: str
    image: str = ""
    follower_count: int = 0
    following_count: int = 0
    review_count: int = 0
    latest_review_date: Optional[datetime] = None

class SuggestionsResponse(CamelModel):
    suggestions: List[SuggestedUserRead]
    total: int
