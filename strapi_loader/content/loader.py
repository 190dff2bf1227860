"""Loader interface and the context handed to loaders on every sync."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ValidationError

from strapi_loader.core.exceptions import EntryValidationError
from .store import DataStore, MetaStore


@dataclass
class LoaderContext:
    """What a loader may touch while loading one collection."""

    collection: str
    store: DataStore
    meta: MetaStore
    logger: Any
    schema: Optional[Type[BaseModel]] = None

    def parse_data(self, id: Any, data: Dict[str, Any]) -> Dict[str, Any]:
        """Validate a record against the collection schema; the record itself is returned unchanged.

        Strapi v4 nests the fields under ``attributes``, v5 returns them flat.
        """
        if self.schema is None:
            return data
        attributes = data.get("attributes")
        fields = attributes if isinstance(attributes, dict) else data
        try:
            self.schema.model_validate(fields)
        except ValidationError as exc:
            raise EntryValidationError(
                self.collection,
                str(id),
                exc.errors(include_url=False, include_context=False),
            ) from exc
        return data


class Loader(ABC):
    """Abstract base class for content loaders."""

    name: str

    @abstractmethod
    async def load(self, context: LoaderContext) -> None:
        """Populate ``context.store`` for the collection."""

    async def schema(self) -> Optional[Type[BaseModel]]:
        """Return the model entries of this collection conform to, if known."""
        return None
