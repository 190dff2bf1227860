"""Settings loading tests"""

import pytest

from strapi_loader.core.config import load_settings
from strapi_loader.core.exceptions import ConfigurationError


class TestSettings:
    def test_missing_base_url_fails_at_startup(self, monkeypatch):
        monkeypatch.delenv("STRAPI_BASE_URL", raising=False)

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(_env_file=None)

        assert exc_info.value.message == "STRAPI_BASE_URL environment variable is not set"

    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("STRAPI_BASE_URL", "http://cms.test")
        for key in ("SYNC_MIN_INTERVAL_SECONDS", "UNKNOWN_FIELD_POLICY", "PUBLIC_STRAPI_URL"):
            monkeypatch.delenv(key, raising=False)

        settings = load_settings(_env_file=None)

        assert settings.SYNC_MIN_INTERVAL_SECONDS == 60
        assert settings.UNKNOWN_FIELD_POLICY == "any"
        assert settings.PUBLIC_STRAPI_URL == "http://localhost:1337"

    def test_docs_follow_environment(self, monkeypatch):
        monkeypatch.setenv("STRAPI_BASE_URL", "http://cms.test")
        monkeypatch.delenv("DOCS_ENABLED", raising=False)

        assert load_settings(_env_file=None, ENV="prod").docs_enabled is False
        assert load_settings(_env_file=None, ENV="dev").docs_enabled is True
