from strapi_loader.models.base import Base
from strapi_loader.models.content import ContentEntry
from strapi_loader.models.meta import LoaderMeta
from strapi_loader.models.runs import SyncRun

__all__ = [
    "Base",
    "ContentEntry",
    "LoaderMeta",
    "SyncRun",
]
