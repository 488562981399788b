"""Reference race data. Run directly (``python seed.py``) to create tables and seed."""
from sqlalchemy.orm import Session

from models.Race import Race

DEFAULT_RACES = [
    {"slug": "austrian-gp-2025", "name": "Austrian Grand Prix 2025", "latest_race": True},
    {"slug": "bahrain-gp-2025", "name": "Bahrain Grand Prix 2025", "latest_race": False},
    {"slug": "saudi-arabia-gp-2025", "name": "Saudi Arabia Grand Prix 2025", "latest_race": False},
    {"slug": "australian-gp-2025", "name": "Australian Grand Prix 2025", "latest_race": False},
]


def seed_races(db: Session, races=None) -> int:
    """Insert the default races when the table is empty. Returns how many were inserted."""
    if db.query(Race.id).first():
        return 0

    races = races if races is not None else DEFAULT_RACES
    for race in races:
        db.add(Race(**race))
    db.commit()
    return len(races)


if __name__ == "__main__":
    import models  # noqa: F401
    from database import Base, SessionLocal, engine

    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        inserted = seed_races(db)
    print(f"Seeded {inserted} races" if inserted else "Races already exist, skipping seed")
