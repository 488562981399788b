from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base, utcnow

# Only slot 1 is handed out for now; the column leaves room for up to five reviews per race.
DEFAULT_REVIEW_NUMBER = 1
MIN_RATING = 1
MAX_RATING = 5

class Review(Base):
    __tablename__ = "race_reviews"
    __table_args__ = (
        UniqueConstraint("user_id", "race_id", "review_number", name="uq_user_race_review_number"),
        CheckConstraint("review_number >= 1 AND review_number <= 5", name="ck_review_number"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    race_id = Column(Integer, ForeignKey("races.id", ondelete="CASCADE"), nullable=False, index=True)
    review_number = Column(Integer, default=DEFAULT_REVIEW_NUMBER, nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False)

    # Relationships
    author = relationship("User", back_populates="reviews")
    race = relationship("Race", back_populates="reviews")
    likes = relationship("ReviewLike", back_populates="review", cascade="all, delete-orphan", passive_deletes=True)
