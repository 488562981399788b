from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.Race import Race
from schemas import RaceRead, RaceResponse
from utils.errors import NotFoundError

router = APIRouter(prefix="/api/races", tags=["Races"])


@router.get("", response_model=List[RaceRead])
def get_races(db: Session = Depends(get_db)):
    return db.query(Race).order_by(Race.id).all()


@router.get("/{slug}", response_model=RaceResponse)
def get_race(slug: str, db: Session = Depends(get_db)):
    """
    Get a race by its slug.
    """
    race = db.query(Race).filter(Race.slug == slug).first()
    if not race:
        raise NotFoundError("Race not found")
    return {"race": race}
