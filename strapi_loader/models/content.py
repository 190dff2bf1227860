"""Local copy of CMS records, one row per entry per collection."""

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from strapi_loader.models.base import Base


class ContentEntry(Base):
    """A fetched CMS record stored verbatim.

    Rows are replaced wholesale on every sync of their collection; the
    digest lets callers tell whether a re-set entry actually changed.
    """

    __tablename__ = "content_entries"

    collection: Mapped[str] = mapped_column(String(100), primary_key=True)

    # Strapi `id` (or `documentId`), always stored as text
    entry_id: Mapped[str] = mapped_column(String(100), primary_key=True)

    data: Mapped[dict] = mapped_column(JSON, nullable=False)

    digest: Mapped[str | None] = mapped_column(String(64), nullable=True)

    stored_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
