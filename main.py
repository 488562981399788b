from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import models  # noqa: F401  (registers every table on Base.metadata)
from config import Settings, get_settings
from database import Base, SessionLocal, engine
from routes import users, follows, races, reviews, feed, health
from seed import seed_races
from services.auth_service import FirebaseSessionResolver
from utils.logger import get_logger, setup_api_logger


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", "Invalid request"))
    return "; ".join(parts) or "Invalid request"


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_api_logger(settings.log_path)
    api_logger = get_logger("app")
    http_logger = get_logger("http")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        Base.metadata.create_all(bind=engine)
        if settings.seed_races:
            with SessionLocal() as db:
                inserted = seed_races(db)
            if inserted:
                api_logger.info("Seeded %s races", inserted)
        yield
        engine.dispose()

    app = FastAPI(title="Paddock API (Races, Reviews, Likes, Follows, Feed)", lifespan=lifespan)
    app.state.settings = settings
    app.state.session_resolver = FirebaseSessionResolver(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Cookie"],
    )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request, exc):
        # the stacktrace stays in the log; the caller only learns that something failed
        http_logger.error("Unhandled exception on %s %s | error=%s",
                          request.method, request.url.path, str(exc), exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request, exc: StarletteHTTPException):
        http_logger.warning("HTTPException on %s %s | status=%s | detail=%s",
                            request.method, request.url.path, exc.status_code, str(exc.detail))
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)},
                            headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc: RequestValidationError):
        message = _validation_message(exc)
        http_logger.warning("Invalid request on %s %s | detail=%s",
                            request.method, request.url.path, message)
        return JSONResponse(status_code=400, content={"error": message})

    app.include_router(health.router)
    app.include_router(races.router)
    app.include_router(users.router)
    app.include_router(follows.router)
    app.include_router(feed.router)
    app.include_router(reviews.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
