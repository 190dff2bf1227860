from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class EntryOut(BaseModel):
    """A stored CMS record, returned verbatim under ``data``."""

    model_config = ConfigDict(from_attributes=True)

    entry_id: str
    data: dict
    digest: Optional[str] = None
    stored_at: Optional[datetime] = None


class EntriesResponse(BaseModel):
    request_id: str
    collection: str
    total_count: int
    data: list[EntryOut]


class CollectionOut(BaseModel):
    name: str
    loader: str
    entries: int
    last_synced_ms: Optional[int] = None


class HealthResponse(BaseModel):
    database: str
    last_sync_status: str | None


class SyncRunOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    run_id: str
    collection: str
    status: str
    records_processed: int
    error_message: str | None = None
    started_at: datetime
    ended_at: datetime | None


class SyncTriggerResponse(BaseModel):
    success: bool
    collection: str
    skipped: bool = False
    records_processed: int
    error: str | None = None


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: dict[str, Any] = {}
