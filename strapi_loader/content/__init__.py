from strapi_loader.content.collections import COLLECTIONS, Collection, define_collection, get_collection
from strapi_loader.content.loader import Loader, LoaderContext
from strapi_loader.content.schema_mapper import FieldSpec, generate_schema, map_type_to_schema
from strapi_loader.content.store import DataStore, MetaStore
from strapi_loader.content.strapi_loader import StrapiLoader, strapi_loader

__all__ = [
    "COLLECTIONS",
    "Collection",
    "DataStore",
    "FieldSpec",
    "Loader",
    "LoaderContext",
    "MetaStore",
    "StrapiLoader",
    "define_collection",
    "generate_schema",
    "get_collection",
    "map_type_to_schema",
    "strapi_loader",
]
