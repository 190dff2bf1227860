"""Database engine and session factory for the local content store."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from strapi_loader.core.config import settings


def _connect_args(url: str) -> dict:
    # SQLite connections are shared between the API threadpool and the sync task
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args(settings.DATABASE_URL),
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
