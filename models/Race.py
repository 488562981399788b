from sqlalchemy import Column, Integer, String, Text, Boolean
from sqlalchemy.orm import relationship
from database import Base

class Race(Base):
    __tablename__ = "races"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    latest_race = Column(Boolean, default=False, nullable=False)
    highlights_url = Column(Text, nullable=True)

    reviews = relationship("Review", back_populates="race", cascade="all, delete-orphan", passive_deletes=True)
