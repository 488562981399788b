from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from utils.logger import get_logger

router = APIRouter(tags=["Health"])
logger = get_logger("health")


@router.get("/")
def root():
    return {
        "message": "Welcome to the Paddock race review API",
        "endpoints": {
            "user": "/api/user/:id",
            "follows": "/api/users/:id/follow",
            "races": "/api/races",
            "reviews": "/api/reviews",
            "feed": "/api/feed/following",
            "suggestions": "/api/users/suggestions",
        },
    }


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Datastore liveness probe.
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Health check failed: %s", e)
        return JSONResponse(status_code=503, content={"status": "unhealthy", "database": "disconnected"})
    return {"status": "healthy", "database": "connected"}
