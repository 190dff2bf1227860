from pathlib import Path
from contextlib import asynccontextmanager
import asyncio
from typing import Optional

from alembic import command
from alembic.config import Config
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from strapi_loader.api.routes import collections, health, stats, sync
from strapi_loader.core.config import settings
from strapi_loader.core.db import SessionLocal
from strapi_loader.core.exceptions import LoaderError
from strapi_loader.core.logging import get_logger
from strapi_loader.schemas.api import ErrorResponse
from strapi_loader.services.sync_service import SyncService


log = get_logger("app")

_sync_task: Optional[asyncio.Task] = None


def run_migrations() -> None:
    """Execute Alembic migrations programmatically on startup."""
    project_root = Path(__file__).resolve().parent.parent
    alembic_cfg = Config(str(project_root / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(project_root / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.DATABASE_URL)
    log.info("Running Alembic migrations to head")
    command.upgrade(alembic_cfg, "head")
    log.info("Alembic migrations applied")


async def run_sync_cycle() -> None:
    """Sync every collection once; failures are logged, not raised."""
    log.info("Starting sync cycle for all collections...")
    with SessionLocal() as db:
        results = await SyncService(db).sync_all()

    for name, result in results.items():
        if result.get("success"):
            log.info(f"Sync {name}: skipped={result.get('skipped')} stored={result.get('records_processed', 0)}")
        else:
            log.error(f"Sync {name}: failed - {result.get('error', 'unknown error')}")


async def scheduled_sync_task() -> None:
    """Background task that syncs at the configured interval."""
    interval = settings.SYNC_INTERVAL_SECONDS
    log.info(f"Scheduled sync task started (interval: {interval}s)")

    while True:
        try:
            await run_sync_cycle()
            await asyncio.sleep(interval)
        except asyncio.CancelledError:
            log.info("Scheduled sync task cancelled")
            break
        except Exception as exc:
            log.exception(f"Scheduled sync task error: {exc}")
            await asyncio.sleep(interval)


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _sync_task

    log.info(f"Starting application in {settings.ENV.upper()} mode against {settings.STRAPI_BASE_URL}")

    try:
        run_migrations()
    except Exception:
        log.exception("Failed to apply migrations on startup")
        raise

    if settings.SYNC_ENABLED:
        log.info("Starting scheduled sync background task...")
        _sync_task = asyncio.create_task(scheduled_sync_task())
    else:
        log.info("Scheduled sync is disabled (SYNC_ENABLED=false)")

    yield

    if _sync_task:
        log.info("Cancelling scheduled sync task...")
        _sync_task.cancel()
        try:
            await _sync_task
        except asyncio.CancelledError:
            pass

    log.info("Application shutdown complete")


app = FastAPI(
    title="Strapi Content Loader",
    description="Caches Strapi collections locally and serves them with generated schemas",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    openapi_url="/openapi.json" if settings.docs_enabled else None,
    debug=settings.debug_enabled,
)


@app.exception_handler(LoaderError)
async def loader_error_handler(request: Request, exc: LoaderError) -> JSONResponse:
    log.warning(f"{exc.error_code} on {request.url.path}: {exc.message}")
    body = ErrorResponse(error_code=exc.error_code, message=exc.message, details=exc.details)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


app.include_router(collections.router)
app.include_router(sync.router)
app.include_router(health.router)
app.include_router(stats.router)
