"""Collection-scoped views over the content tables.

A loader never touches the ORM directly: it receives a ``DataStore`` for
entries and a ``MetaStore`` for its own bookkeeping, both bound to one
collection and one session. Committing is left to the caller.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from strapi_loader.models.content import ContentEntry
from strapi_loader.models.meta import LoaderMeta


def generate_digest(data: Any) -> str:
    """Stable content hash of a JSON-serialisable value."""
    encoded = json.dumps(data, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


class DataStore:
    def __init__(self, db: Session, collection: str):
        self.db = db
        self.collection = collection

    def _key(self, entry_id: Any) -> tuple:
        return (self.collection, str(entry_id))

    def get(self, entry_id: Any) -> Optional[ContentEntry]:
        return self.db.get(ContentEntry, self._key(entry_id))

    def has(self, entry_id: Any) -> bool:
        return self.get(entry_id) is not None

    def set(self, id: Any, data: Dict[str, Any], digest: Optional[str] = None) -> bool:
        """Insert or overwrite an entry. Returns False when the digest is unchanged."""
        digest = digest or generate_digest(data)
        entry = self.get(id)
        if entry is None:
            self.db.add(ContentEntry(collection=self.collection, entry_id=str(id), data=data, digest=digest))
            # Queries later in the same transaction must see the new row
            self.db.flush()
            return True
        if entry.digest == digest:
            return False
        entry.data = data
        entry.digest = digest
        self.db.flush()
        return True

    def delete(self, entry_id: Any) -> None:
        entry = self.get(entry_id)
        if entry is not None:
            self.db.delete(entry)
            self.db.flush()

    def clear(self) -> None:
        stmt = (
            delete(ContentEntry)
            .where(ContentEntry.collection == self.collection)
            .execution_options(synchronize_session="fetch")
        )
        self.db.execute(stmt)

    def entries(self, limit: Optional[int] = None, offset: int = 0) -> List[ContentEntry]:
        stmt = (
            select(ContentEntry)
            .where(ContentEntry.collection == self.collection)
            .order_by(ContentEntry.entry_id)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def keys(self) -> List[str]:
        stmt = select(ContentEntry.entry_id).where(ContentEntry.collection == self.collection)
        return list(self.db.execute(stmt).scalars().all())

    def count(self) -> int:
        stmt = select(func.count()).select_from(ContentEntry).where(ContentEntry.collection == self.collection)
        return self.db.execute(stmt).scalar() or 0

    def __iter__(self) -> Iterator[ContentEntry]:
        return iter(self.entries())


class MetaStore:
    """String key/value pairs private to one collection's loader."""

    def __init__(self, db: Session, collection: str):
        self.db = db
        self.collection = collection

    def get(self, key: str) -> Optional[str]:
        row = self.db.get(LoaderMeta, (self.collection, key))
        return row.value if row else None

    def set(self, key: str, value: str) -> None:
        row = self.db.get(LoaderMeta, (self.collection, key))
        if row is None:
            self.db.add(LoaderMeta(collection=self.collection, key=key, value=str(value)))
        else:
            row.value = str(value)
        self.db.flush()

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def delete(self, key: str) -> None:
        row = self.db.get(LoaderMeta, (self.collection, key))
        if row is not None:
            self.db.delete(row)
            self.db.flush()
