import os
from functools import lru_cache
from typing import List, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _split_origins(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ()
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


class Settings(BaseModel):
    """Process-wide configuration, built once at startup and passed around explicitly."""
    database_url: str = "sqlite:///./paddock.db"
    environment: str = "development"
    frontend_url: str = "http://localhost:5173"
    api_base_url: str = "http://localhost:8000"
    trusted_origins: Tuple[str, ...] = ()
    firebase_credentials_path: str = "serviceAccountKey.json"
    firebase_project_id: Optional[str] = None
    log_path: str = "logs/api.log"
    seed_races: bool = True

    class Config:
        frozen = True

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///./paddock.db"),
            environment=os.getenv("APP_ENV", "development"),
            frontend_url=os.getenv("FRONTEND_URL", "http://localhost:5173"),
            api_base_url=os.getenv("API_BASE_URL", "http://localhost:8000"),
            trusted_origins=_split_origins(os.getenv("TRUSTED_ORIGINS")),
            firebase_credentials_path=os.getenv("FIREBASE_CREDENTIALS_PATH", "serviceAccountKey.json"),
            firebase_project_id=os.getenv("FIREBASE_PROJECT_ID") or None,
            log_path=os.getenv("LOG_PATH", "logs/api.log"),
            seed_races=os.getenv("SEED_RACES", "true").lower() in ("1", "true", "yes"),
        )

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def cors_origins(self) -> List[str]:
        origins = [self.frontend_url, *self.trusted_origins]
        # the API itself serves the auth callback pages in development
        if self.is_development:
            origins.append(self.api_base_url)
        return list(dict.fromkeys(origins))


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
