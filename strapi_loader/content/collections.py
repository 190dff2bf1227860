"""Content collections served from the local store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from strapi_loader.core.exceptions import CollectionNotFoundError
from .loader import Loader
from .strapi_loader import strapi_loader


@dataclass(frozen=True)
class Collection:
    loader: Loader


def define_collection(loader: Loader) -> Collection:
    return Collection(loader=loader)


COLLECTIONS: Dict[str, Collection] = {
    "strapi_posts": define_collection(loader=strapi_loader("post")),
}


def get_collection(name: str, collections: Dict[str, Collection] | None = None) -> Collection:
    registry = COLLECTIONS if collections is None else collections
    try:
        return registry[name]
    except KeyError:
        raise CollectionNotFoundError(name) from None
