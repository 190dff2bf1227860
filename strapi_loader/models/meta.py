"""Per-collection key/value metadata owned by the loader (e.g. lastSynced)."""

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from strapi_loader.models.base import Base


class LoaderMeta(Base):
    __tablename__ = "loader_meta"

    collection: Mapped[str] = mapped_column(String(100), primary_key=True)

    key: Mapped[str] = mapped_column(String(100), primary_key=True)

    value: Mapped[str] = mapped_column(Text, nullable=False)

    updated_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
