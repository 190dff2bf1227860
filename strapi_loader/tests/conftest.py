"""Shared fixtures: in-memory store and a fake Strapi behind httpx.MockTransport"""

import os

# Settings are read at import time
os.environ.setdefault("STRAPI_BASE_URL", "http://strapi.test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_DIR", "")

from typing import Any, Dict, List, Optional

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from strapi_loader.cms.client import StrapiClient
from strapi_loader.content.collections import define_collection
from strapi_loader.content.strapi_loader import StrapiLoader
from strapi_loader.models import Base

BASE_URL = "http://strapi.test"

POST_ATTRIBUTES = {
    "title": {"type": "string", "required": True},
    "slug": {"type": "uid", "targetField": "title"},
    "content": {"type": "richtext"},
    "publishedAt": {"type": "datetime"},
    "featured": {"type": "boolean"},
    "views": {"type": "number"},
}


def make_post(id: int, title: str = "Hello", **extra: Any) -> Dict[str, Any]:
    post = {
        "id": id,
        "documentId": f"doc-{id}",
        "title": title,
        "slug": title.lower().replace(" ", "-"),
        "content": "Some *rich* text",
        "publishedAt": "2024-05-01T10:00:00.000Z",
        "featured": False,
        "views": 12,
    }
    post.update(extra)
    return post


class FakeStrapi:
    """Serves one content type's listing and schema; records every request."""

    def __init__(
        self,
        content_type: str = "post",
        records: Optional[List[Dict[str, Any]]] = None,
        attributes: Optional[Dict[str, Any]] = None,
    ):
        self.content_type = content_type
        self.records = records if records is not None else [make_post(1), make_post(2, "Second post")]
        self.attributes = attributes if attributes is not None else dict(POST_ATTRIBUTES)
        self.fail_status: Optional[int] = None
        self.calls: List[httpx.Request] = []

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.fail_status:
            return httpx.Response(self.fail_status, json={"error": {"message": "boom"}})
        path = request.url.path
        if path == f"/api/{self.content_type}s":
            return httpx.Response(200, json={"data": self.records, "meta": {"pagination": {"total": len(self.records)}}})
        if path == f"/get-strapi-schema/schema/{self.content_type}":
            return httpx.Response(200, json={"attributes": self.attributes})
        return httpx.Response(404, json={"error": {"message": "not found"}})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def listing_calls(self) -> List[httpx.Request]:
        return [c for c in self.calls if c.url.path.startswith("/api/")]


@pytest.fixture
def session_factory():
    """Fresh in-memory database per test; every session shares its one connection"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_strapi():
    return FakeStrapi()


@pytest.fixture
def strapi_client(fake_strapi):
    return StrapiClient(base_url=BASE_URL, token=None, transport=fake_strapi.transport)


@pytest.fixture
def post_loader(strapi_client):
    return StrapiLoader("post", client=strapi_client, min_interval_seconds=60, validate_entries=False)


@pytest.fixture
def collections(post_loader):
    return {"strapi_posts": define_collection(loader=post_loader)}
