"""Content Service - read-only queries over the local store."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from strapi_loader.content.collections import COLLECTIONS, Collection, get_collection
from strapi_loader.content.store import DataStore, MetaStore
from strapi_loader.content.strapi_loader import LAST_SYNCED_KEY, parse_stamp
from strapi_loader.models.content import ContentEntry
from strapi_loader.models.runs import SyncRun


class ContentService:
    """Handles all content query operations - reads from DB only, no writes."""

    def __init__(self, db: Session, collections: Optional[Dict[str, Collection]] = None):
        self.db = db
        self.collections = COLLECTIONS if collections is None else collections

    def _store(self, name: str) -> DataStore:
        get_collection(name, self.collections)
        return DataStore(self.db, name)

    def list_collections(self) -> List[Dict[str, Any]]:
        summary = []
        for name, collection in self.collections.items():
            summary.append(
                {
                    "name": name,
                    "loader": collection.loader.name,
                    "entries": DataStore(self.db, name).count(),
                    "last_synced_ms": parse_stamp(MetaStore(self.db, name).get(LAST_SYNCED_KEY)),
                }
            )
        return summary

    def get_entries(self, name: str, limit: int = 50, offset: int = 0) -> List[ContentEntry]:
        return self._store(name).entries(limit=limit, offset=offset)

    def get_entry(self, name: str, entry_id: str) -> Optional[ContentEntry]:
        return self._store(name).get(entry_id)

    def count_entries(self, name: str) -> int:
        return self._store(name).count()

    def get_sync_runs(
        self,
        collection: Optional[str] = None,
        status: Optional[str] = None,
        limit: int = 10,
    ) -> List[SyncRun]:
        """Get recent sync runs with optional filtering."""
        stmt = select(SyncRun)
        if collection:
            stmt = stmt.where(SyncRun.collection == collection)
        if status:
            stmt = stmt.where(SyncRun.status == status)
        # Runs started in the same instant: a still-running one first, then the one that ended last
        stmt = stmt.order_by(SyncRun.started_at.desc(), SyncRun.ended_at.desc().nullsfirst()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())
