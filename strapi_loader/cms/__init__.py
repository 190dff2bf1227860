from strapi_loader.cms.client import StrapiClient, fetch_strapi

__all__ = ["StrapiClient", "fetch_strapi"]
