# Services package
from strapi_loader.services.content_service import ContentService
from strapi_loader.services.sync_service import SyncService

__all__ = [
    "ContentService",
    "SyncService",
]
