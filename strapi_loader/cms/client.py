"""HTTP access to the Strapi REST API and the schema-export plugin."""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import httpx

from strapi_loader.core.config import settings
from strapi_loader.core.logging import get_logger

log = get_logger("cms.client")

JSON_HEADERS = {"Content-Type": "application/json"}


def build_url(base_url: str, path: str) -> str:
    """Resolve ``path`` against ``base_url`` the way a browser ``URL`` would."""
    return urljoin(base_url if base_url.endswith("/") else f"{base_url}/", path)


def build_headers(token: Optional[str]) -> Dict[str, str]:
    headers = dict(JSON_HEADERS)
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


async def fetch_strapi(
    method: str,
    path: str,
    payload: Any = None,
    *,
    base_url: Optional[str] = None,
    token: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.Response:
    """Send a single request to Strapi and hand back the raw response.

    The payload, when given, is wrapped in Strapi's ``{"data": ...}``
    envelope. Status codes are not checked here; callers decide.
    """
    url = build_url(base_url or settings.PUBLIC_STRAPI_URL, path)
    body = {"data": payload} if payload is not None else None

    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS, transport=transport) as client:
        return await client.request(
            method.upper(),
            url,
            headers=build_headers(token if token is not None else settings.STRAPI_API_TOKEN),
            json=body,
        )


class StrapiClient:
    """Reads collection listings and content-type schemas from one Strapi instance."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.STRAPI_BASE_URL
        self.token = token if token is not None else settings.STRAPI_API_TOKEN
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self.transport = transport

    def collection_url(self, content_type: str) -> str:
        return build_url(self.base_url, f"/api/{content_type}s")

    def schema_url(self, content_type: str) -> str:
        return build_url(self.base_url, f"/get-strapi-schema/schema/{content_type}")

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.get(url, params=params, headers=build_headers(self.token))
            resp.raise_for_status()
            return resp.json()

    async def get_collection(
        self,
        content_type: str,
        populate: str = "*",
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Fetch the listing for a content type; only one page is ever requested."""
        params: Dict[str, Any] = {"populate": populate}
        if page is not None:
            params["pagination[page]"] = page
        if page_size is not None:
            params["pagination[pageSize]"] = page_size

        body = await self._get_json(self.collection_url(content_type), params)
        records = body.get("data") or []
        log.info(f"Fetched {len(records)} {content_type} records from Strapi")
        return records

    async def get_schema(self, content_type: str) -> Dict[str, Any]:
        """Fetch the attribute map exposed by the get-strapi-schema plugin."""
        body = await self._get_json(self.schema_url(content_type))
        attributes = body.get("attributes") or {}
        log.debug(f"Schema attributes for {content_type}: {attributes}")
        return attributes
