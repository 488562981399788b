from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base, utcnow

class Follow(Base):
    """Directed edge: ``user_id`` follows ``following_id``."""
    __tablename__ = "follows"
    __table_args__ = (
        UniqueConstraint("user_id", "following_id", name="uq_user_following"),
        CheckConstraint("user_id != following_id", name="ck_no_self_follow"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    following_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    follower = relationship("User", foreign_keys=[user_id], back_populates="following")
    following_user = relationship("User", foreign_keys=[following_id], back_populates="followers")
