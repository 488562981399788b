from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base, utcnow

class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("follower_count >= 0", name="ck_users_follower_count"),
        CheckConstraint("following_count >= 0", name="ck_users_following_count"),
    )

    id = Column(String(64), primary_key=True, index=True)  # identity provider uid
    name = Column(Text, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    email_verified = Column(Boolean, default=False, nullable=False)
    image = Column(Text, nullable=True)  # avatar URL
    follower_count = Column(Integer, default=0, nullable=False)
    following_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow, nullable=False)

    # Relationships
    following = relationship("Follow", foreign_keys="Follow.user_id", back_populates="follower", cascade="all, delete-orphan", passive_deletes=True)
    followers = relationship("Follow", foreign_keys="Follow.following_id", back_populates="following_user", cascade="all, delete-orphan", passive_deletes=True)
    reviews = relationship("Review", back_populates="author", cascade="all, delete-orphan", passive_deletes=True)
    likes = relationship("ReviewLike", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
