"""Drives collection loaders against the local store and records each run."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from strapi_loader.content.collections import COLLECTIONS, Collection, get_collection
from strapi_loader.content.loader import LoaderContext
from strapi_loader.content.store import DataStore, MetaStore
from strapi_loader.content.strapi_loader import LAST_SYNCED_KEY
from strapi_loader.core.logging import get_logger
from strapi_loader.models.runs import SyncRun

log = get_logger("sync_service")


class SyncService:
    """Runs one sync cycle per collection: schema first, then records.

    Responsibilities:
    - Build the loader context (store, meta, logger) for a collection
    - Commit the store on success, roll it back on failure
    - Track every attempt as a SyncRun
    """

    def __init__(self, db: Session, collections: Optional[Dict[str, Collection]] = None):
        self.db = db
        self.collections = COLLECTIONS if collections is None else collections

    def context_for(self, name: str, loader_name: str, schema: Any = None) -> LoaderContext:
        return LoaderContext(
            collection=name,
            store=DataStore(self.db, name),
            meta=MetaStore(self.db, name),
            logger=get_logger(loader_name),
            schema=schema,
        )

    async def sync(self, name: str, force: bool = False) -> Dict[str, Any]:
        """Sync a single collection. ``force`` ignores the last-synced guard."""
        loader = get_collection(name, self.collections).loader

        run = SyncRun(collection=name, status="running", records_processed=0)
        self.db.add(run)
        self.db.commit()
        self.db.refresh(run)

        try:
            log.info(f"Starting sync for {name} | loader={loader.name} force={force}")

            schema = await loader.schema()
            context = self.context_for(name, loader.name, schema)

            if force:
                context.meta.delete(LAST_SYNCED_KEY)
            before = context.meta.get(LAST_SYNCED_KEY)

            await loader.load(context)

            after = context.meta.get(LAST_SYNCED_KEY)
            skipped = after is not None and after == before
            records = 0 if skipped else context.store.count()

            run.status = "skipped" if skipped else "success"
            run.records_processed = records
            run.ended_at = datetime.now(timezone.utc)
            self.db.commit()

            log.info(f"Sync finished for {name} | status={run.status} stored={records}")
            return {"success": True, "skipped": skipped, "records_processed": records, "collection": name}

        except Exception as exc:
            self.db.rollback()
            run.status = "failure"
            run.error_message = str(exc)
            run.ended_at = datetime.now(timezone.utc)
            self.db.add(run)
            self.db.commit()
            log.error(f"Sync failed for {name}: {exc}")
            raise

    async def sync_all(self, force: bool = False) -> Dict[str, Any]:
        """Sync every defined collection in turn; one failure does not stop the rest."""
        results: Dict[str, Any] = {}
        for name in self.collections:
            try:
                results[name] = await self.sync(name, force=force)
            except Exception as exc:  # noqa: BLE001
                results[name] = {"success": False, "error": str(exc), "collection": name}
        return results
