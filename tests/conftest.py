import os
import tempfile

# must be in place before config.get_settings() is first called
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_PATH", os.path.join(tempfile.mkdtemp(prefix="paddock-logs-"), "api.log"))
os.environ.setdefault("SEED_RACES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, build_engine, get_db
from main import app
from models.Race import Race
from models.User import User
from services.auth_service import bearer_token, get_session_resolver


class TokenIsUidResolver:
    """Test identity provider: the bearer token is the user id."""

    def resolve(self, headers):
        return bearer_token(headers)


def auth(user_id):
    return {"Authorization": f"Bearer {user_id}"}


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_resolver] = TokenIsUidResolver
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(user_id, name=None, image=None):
        user = User(
            id=user_id,
            name=name or user_id.capitalize(),
            email=f"{user_id}@example.com",
            image=image,
        )
        db.add(user)
        db.commit()
        return user
    return _make_user


@pytest.fixture
def make_race(db):
    def _make_race(slug, name=None, latest_race=False):
        race = Race(slug=slug, name=name or slug.replace("-", " ").title(), latest_race=latest_race)
        db.add(race)
        db.commit()
        return race
    return _make_race


def counters(db, user_id):
    db.expire_all()
    user = db.query(User).filter(User.id == user_id).one()
    return user.follower_count, user.following_count
