"""Strapi HTTP helper tests"""

import json

import httpx
import pytest

from strapi_loader.cms.client import StrapiClient, build_url, fetch_strapi


class Recorder:
    def __init__(self, status: int = 200, body=None):
        self.status = status
        self.body = body if body is not None else {"data": []}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, json=self.body)


class TestBuildUrl:
    def test_absolute_path_replaces_base_path(self):
        assert build_url("http://cms.test/admin", "/api/posts") == "http://cms.test/api/posts"

    def test_base_without_trailing_slash(self):
        assert build_url("http://cms.test", "api/posts") == "http://cms.test/api/posts"


class TestFetchStrapi:
    """fetch_strapi wraps payloads and attaches headers"""

    @pytest.mark.asyncio
    async def test_post_wraps_payload_in_data(self):
        recorder = Recorder(status=201, body={"data": {"id": 5}})

        response = await fetch_strapi(
            "post",
            "/api/posts",
            {"title": "New"},
            base_url="http://cms.test",
            token="",
            transport=httpx.MockTransport(recorder),
        )

        request = recorder.requests[0]
        assert response.status_code == 201
        assert request.method == "POST"
        assert str(request.url) == "http://cms.test/api/posts"
        assert request.headers["content-type"] == "application/json"
        assert "authorization" not in request.headers
        assert json.loads(request.content) == {"data": {"title": "New"}}

    @pytest.mark.asyncio
    async def test_get_sends_no_body_and_bearer_token(self):
        recorder = Recorder()

        await fetch_strapi(
            "GET",
            "/api/posts",
            base_url="http://cms.test",
            token="secret",
            transport=httpx.MockTransport(recorder),
        )

        request = recorder.requests[0]
        assert request.content == b""
        assert request.headers["authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_error_status_is_returned_not_raised(self):
        recorder = Recorder(status=403, body={"error": "forbidden"})

        response = await fetch_strapi(
            "GET", "/api/posts", base_url="http://cms.test", token="", transport=httpx.MockTransport(recorder)
        )

        assert response.status_code == 403


class TestStrapiClient:
    """Collection and schema endpoints"""

    def test_endpoint_urls(self):
        client = StrapiClient(base_url="http://cms.test")
        assert client.collection_url("article") == "http://cms.test/api/articles"
        assert client.schema_url("article") == "http://cms.test/get-strapi-schema/schema/article"

    @pytest.mark.asyncio
    async def test_get_collection_returns_data(self):
        recorder = Recorder(body={"data": [{"id": 1}], "meta": {}})
        client = StrapiClient(base_url="http://cms.test", token="t", transport=httpx.MockTransport(recorder))

        records = await client.get_collection("post")

        assert records == [{"id": 1}]
        assert recorder.requests[0].headers["authorization"] == "Bearer t"

    @pytest.mark.asyncio
    async def test_get_schema_returns_attributes(self):
        recorder = Recorder(body={"attributes": {"title": {"type": "string"}}})
        client = StrapiClient(base_url="http://cms.test", transport=httpx.MockTransport(recorder))

        assert await client.get_schema("post") == {"title": {"type": "string"}}

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = StrapiClient(base_url="http://cms.test", transport=httpx.MockTransport(refuse))

        with pytest.raises(httpx.ConnectError):
            await client.get_collection("post")
