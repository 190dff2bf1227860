"""Stats routes - Sync run history."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from strapi_loader.api.deps import get_db
from strapi_loader.schemas.api import SyncRunOut
from strapi_loader.services.content_service import ContentService

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=list[SyncRunOut])
def get_sync_stats(
    collection: Optional[str] = Query(None, description="Filter by collection name"),
    status: Optional[str] = Query(None, description="Filter by status (running, success, skipped, failure)"),
    limit: int = Query(10, ge=1, le=50, description="Number of runs to return"),
    db: Session = Depends(get_db),
):
    """
    Get recent sync runs.

    Shows records stored, status and error messages per run.
    """
    service = ContentService(db)
    runs = service.get_sync_runs(collection=collection, status=status, limit=limit)

    return [
        SyncRunOut(
            run_id=str(run.run_id),
            collection=run.collection,
            status=run.status,
            records_processed=run.records_processed,
            error_message=run.error_message,
            started_at=run.started_at,
            ended_at=run.ended_at,
        )
        for run in runs
    ]
