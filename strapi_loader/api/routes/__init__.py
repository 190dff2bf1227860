from strapi_loader.api.routes.collections import router as collections_router
from strapi_loader.api.routes.health import router as health_router
from strapi_loader.api.routes.stats import router as stats_router
from strapi_loader.api.routes.sync import router as sync_router

__all__ = ["collections_router", "health_router", "stats_router", "sync_router"]
