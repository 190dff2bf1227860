"""Health routes - Store connectivity and last sync status."""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from strapi_loader.api.deps import get_db
from strapi_loader.schemas.api import HealthResponse
from strapi_loader.services.content_service import ContentService

router = APIRouter(prefix="/health", tags=["health"])


def store_error(db: Session) -> Optional[str]:
    """None when the local store answers, otherwise the driver error."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        return str(e)
    return None


@router.get("", response_model=HealthResponse)
def health(response: Response, db: Session = Depends(get_db)):
    """
    Report store connectivity and the outcome of the most recent sync run.

    Returns 503 if the store is unreachable.
    """
    error = store_error(db)
    if error:
        response.status_code = 503
        return HealthResponse(database=f"down: {error}", last_sync_status=None)

    latest = ContentService(db).get_sync_runs(limit=1)
    return HealthResponse(
        database="ok",
        last_sync_status=latest[0].status if latest else None,
    )


@router.get("/ready")
def readiness(response: Response, db: Session = Depends(get_db)):
    """Readiness probe - 200 once the store answers, 503 otherwise."""
    timestamp = datetime.now(timezone.utc).isoformat()
    error = store_error(db)
    if error:
        response.status_code = 503
        return {"status": "not_ready", "error": error, "timestamp": timestamp}
    return {"status": "ready", "timestamp": timestamp}
