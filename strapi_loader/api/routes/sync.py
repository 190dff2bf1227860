"""Sync routes - Trigger collection syncs from Strapi."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from strapi_loader.api.deps import get_db
from strapi_loader.content.collections import get_collection
from strapi_loader.core.logging import get_logger
from strapi_loader.schemas.api import SyncTriggerResponse
from strapi_loader.services.sync_service import SyncService

router = APIRouter(prefix="/sync", tags=["sync"])
log = get_logger("sync_routes")


@router.post("/run-all")
async def trigger_sync_all(
    force: bool = Query(False, description="Ignore the last-synced guard"),
    db: Session = Depends(get_db),
):
    """
    Sync every defined collection sequentially.

    Returns the result of each collection.
    """
    log.info("Sync triggered for all collections")

    service = SyncService(db)
    results = await service.sync_all(force=force)

    return {
        "success": all(r.get("success", False) for r in results.values()),
        "results": results,
    }


@router.post("/{name}", response_model=SyncTriggerResponse)
async def trigger_sync(
    name: str,
    force: bool = Query(False, description="Ignore the last-synced guard"),
    db: Session = Depends(get_db),
):
    """
    Sync one collection.

    1. Fetch the content-type schema
    2. Skip if the collection synced less than a minute ago (unless forced)
    3. Fetch the listing, clear the store, store every record
    4. Record the new last-synced time
    """
    get_collection(name)
    log.info(f"Sync triggered for collection: {name}")

    try:
        service = SyncService(db)
        result = await service.sync(name, force=force)

        return SyncTriggerResponse(
            success=result["success"],
            collection=name,
            skipped=result["skipped"],
            records_processed=result["records_processed"],
        )
    except Exception as exc:
        log.error(f"Sync failed for {name}: {exc}")
        return SyncTriggerResponse(
            success=False,
            collection=name,
            records_processed=0,
            error=str(exc),
        )
