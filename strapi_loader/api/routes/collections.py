"""Collection routes - Serve cached CMS entries and generated schemas."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from strapi_loader.api.deps import get_db
from strapi_loader.content.collections import get_collection
from strapi_loader.schemas.api import CollectionOut, EntriesResponse, EntryOut
from strapi_loader.services.content_service import ContentService

router = APIRouter(prefix="/collections", tags=["collections"])


@router.get("", response_model=list[CollectionOut])
def list_collections(db: Session = Depends(get_db)):
    """List defined collections with their entry counts and last sync time."""
    service = ContentService(db)
    return [CollectionOut(**row) for row in service.list_collections()]


@router.get("/{name}/entries", response_model=EntriesResponse)
def get_entries(
    name: str,
    limit: int = Query(50, ge=1, le=500, description="Number of entries to return (max 500)"),
    offset: int = Query(0, ge=0, description="Number of entries to skip"),
    db: Session = Depends(get_db),
):
    """
    Get cached entries of a collection.

    Entries are the records from the last successful sync, stored verbatim.
    """
    request_id = str(uuid.uuid4())
    service = ContentService(db)

    entries = service.get_entries(name, limit=limit, offset=offset)

    return EntriesResponse(
        request_id=request_id,
        collection=name,
        total_count=service.count_entries(name),
        data=[EntryOut.model_validate(e) for e in entries],
    )


@router.get("/{name}/entries/{entry_id}", response_model=EntryOut)
def get_entry(name: str, entry_id: str, db: Session = Depends(get_db)):
    """Get a single cached entry by its Strapi id."""
    service = ContentService(db)
    entry = service.get_entry(name, entry_id)

    if not entry:
        raise HTTPException(status_code=404, detail=f"Entry '{entry_id}' not found in {name}")

    return EntryOut.model_validate(entry)


@router.get("/{name}/schema")
async def get_schema(name: str):
    """
    Get the JSON Schema generated from the CMS content-type definition.

    Fetched live from Strapi on every call.
    """
    loader = get_collection(name).loader
    model = await loader.schema()
    if model is None:
        raise HTTPException(status_code=404, detail=f"Collection '{name}' has no schema")
    return model.model_json_schema(by_alias=True)
