"""API dependencies"""

from typing import Generator

from sqlalchemy.orm import Session

from strapi_loader.core.db import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Database session scoped to one request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
