"""Loader that mirrors one Strapi content type into the local store."""

from __future__ import annotations

import math
import time
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel

from strapi_loader.cms.client import StrapiClient
from strapi_loader.core.config import settings
from .loader import Loader, LoaderContext
from .schema_mapper import generate_schema

LAST_SYNCED_KEY = "lastSynced"


def now_ms() -> int:
    return int(time.time() * 1000)


def parse_stamp(value: Optional[str]) -> Optional[int]:
    """Milliseconds from a stored ``lastSynced`` value, or None if it is unusable."""
    if not value:
        return None
    try:
        stamp = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(stamp):
        return None
    return int(stamp)


def entry_id(record: Dict[str, Any]) -> Any:
    """Strapi v4 keys records by ``id``; v5 adds a stable ``documentId``."""
    if record.get("id") is not None:
        return record["id"]
    return record.get("documentId")


class StrapiLoader(Loader):
    """Fetches a Strapi collection listing and its schema.

    ``load`` is a no-op while the previous sync is younger than
    ``min_interval_seconds``; otherwise it replaces the whole store with the
    fetched listing. Fetch errors are not retried.
    """

    def __init__(
        self,
        content_type: str,
        client: Optional[StrapiClient] = None,
        min_interval_seconds: Optional[int] = None,
        validate_entries: Optional[bool] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ):
        self.content_type = content_type
        self.name = f"strapi-{content_type}s"
        self.client = client or StrapiClient()
        self.min_interval_seconds = (
            settings.SYNC_MIN_INTERVAL_SECONDS if min_interval_seconds is None else min_interval_seconds
        )
        self.validate_entries = settings.VALIDATE_ENTRIES if validate_entries is None else validate_entries
        self.page = page
        self.page_size = page_size

    def is_fresh(self, last_synced: Optional[str], now: Optional[int] = None) -> bool:
        last = parse_stamp(last_synced)
        if last is None:
            return False
        now = now_ms() if now is None else now
        return now - last < self.min_interval_seconds * 1000

    async def load(self, context: LoaderContext) -> None:
        logger = context.logger

        if self.is_fresh(context.meta.get(LAST_SYNCED_KEY)):
            logger.info("Skipping Strapi sync")
            return

        logger.info(f"Fetching {self.content_type}s from Strapi")
        records = await self.client.get_collection(
            self.content_type,
            page=self.page,
            page_size=self.page_size,
        )

        context.store.clear()

        for record in records:
            key = entry_id(record)
            if key is None:
                logger.warning(f"Skipping {self.content_type} record without id or documentId")
                continue
            data = context.parse_data(key, record) if self.validate_entries else record
            context.store.set(id=key, data=data)

        context.meta.set(LAST_SYNCED_KEY, str(now_ms()))

    async def schema(self) -> Type[BaseModel]:
        attributes = await self.client.get_schema(self.content_type)
        return generate_schema(attributes, model_name=_schema_model_name(self.content_type))


def _schema_model_name(content_type: str) -> str:
    return "".join(part.capitalize() for part in content_type.replace("-", "_").split("_")) + "Entry"


def strapi_loader(content_type: str, **kwargs: Any) -> StrapiLoader:
    return StrapiLoader(content_type, **kwargs)
