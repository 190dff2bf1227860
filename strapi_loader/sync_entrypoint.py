"""Sync entrypoint - Standalone script for running collection syncs.

Usage:
    python -m strapi_loader.sync_entrypoint                      # Sync all collections
    python -m strapi_loader.sync_entrypoint strapi_posts         # Sync one collection
    python -m strapi_loader.sync_entrypoint strapi_posts --force # Ignore the last-synced guard
"""

import asyncio
import sys
from typing import Any, Dict, List

from strapi_loader.content.collections import COLLECTIONS
from strapi_loader.core.db import SessionLocal
from strapi_loader.core.logging import get_logger
from strapi_loader.services.sync_service import SyncService

logger = get_logger("sync_entrypoint")


async def run_sync_job(name: str, force: bool = False) -> Dict[str, Any]:
    """Sync a single collection."""
    logger.info(f"Starting sync job for collection: {name}")
    with SessionLocal() as db:
        result = await SyncService(db).sync(name, force=force)
        logger.info(f"Sync job completed for {name}: {result}")
        return result


async def run_all_collections(force: bool = False) -> Dict[str, Any]:
    """Sync all collections."""
    logger.info("Syncing all collections")
    with SessionLocal() as db:
        results = await SyncService(db).sync_all(force=force)
        logger.info(f"Sync completed for all collections: {results}")
        return results


def main(argv: List[str] | None = None) -> Dict[str, Any]:
    """Main entry point for the sync CLI."""
    args = list(sys.argv[1:] if argv is None else argv)
    force = "--force" in args
    names = [a for a in args if not a.startswith("--")]

    if names:
        name = names[0]
        if name not in COLLECTIONS:
            logger.error(f"Invalid collection: {name}. Must be one of: {', '.join(COLLECTIONS)}")
            sys.exit(1)
        try:
            results = {name: asyncio.run(run_sync_job(name, force=force))}
        except Exception as exc:  # noqa: BLE001
            results = {name: {"success": False, "error": str(exc), "collection": name}}
    else:
        results = asyncio.run(run_all_collections(force=force))

    logger.info(f"Sync finished: {results}")

    if any(not r.get("success", False) for r in results.values()):
        sys.exit(1)

    return results


if __name__ == "__main__":
    main()
