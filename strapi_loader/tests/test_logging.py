"""Logging setup tests"""

import logging

import pytest

from strapi_loader.core.logging import InterceptHandler, resolve_level


class TestResolveLevel:
    @pytest.mark.parametrize(
        "raw, expected",
        [("debug", "DEBUG"), (" warn ", "WARNING"), ("fatal", "CRITICAL"), ("chatty", "INFO"), (None, "INFO")],
    )
    def test_aliases_and_fallback(self, raw, expected):
        assert resolve_level(raw) == expected

    def test_production_floor_is_info(self):
        assert resolve_level("DEBUG", production=True) == "INFO"
        assert resolve_level("TRACE", production=True) == "INFO"
        assert resolve_level("ERROR", production=True) == "ERROR"


class TestStdlibInterception:
    def test_httpx_request_lines_are_quiet(self):
        assert logging.getLogger("httpx").getEffectiveLevel() == logging.WARNING

    def test_uvicorn_routes_through_loguru(self):
        handlers = logging.getLogger("uvicorn.access").handlers
        assert [type(h) for h in handlers] == [InterceptHandler]
