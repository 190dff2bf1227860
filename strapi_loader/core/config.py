from typing import Literal

from loguru import logger
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from strapi_loader.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    # Environment mode: dev or prod
    ENV: Literal["dev", "prod"] = "dev"

    # Strapi
    STRAPI_BASE_URL: str
    PUBLIC_STRAPI_URL: str = "http://localhost:1337"
    STRAPI_API_TOKEN: str | None = None
    HTTP_TIMEOUT_SECONDS: float = 15.0

    # Local content store
    DATABASE_URL: str = "sqlite:///./content.db"

    # Logging
    LOG_LEVEL: str = "INFO"
    # Empty disables the rotating file sink
    LOG_DIR: str = "logs"
    ALERT_WEBHOOK_URL: str | None = None

    # Sync
    SYNC_MIN_INTERVAL_SECONDS: int = 60  # Don't resync a collection more than once a minute
    SYNC_INTERVAL_SECONDS: int = 15 * 60
    SYNC_ENABLED: bool = False  # Background sync loop in the API process

    # Schema mapping
    UNKNOWN_FIELD_POLICY: Literal["any", "error"] = "any"
    VALIDATE_ENTRIES: bool = False

    # Docs Configuration
    DOCS_ENABLED: bool | None = None  # Override docs setting (None = auto based on ENV)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # ignore unrelated keys in local .env
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENV == "prod"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENV == "dev"

    @property
    def debug_enabled(self) -> bool:
        """Debug mode is only enabled in development."""
        return self.is_development

    @property
    def docs_enabled(self) -> bool:
        """Swagger/ReDoc docs enabled based on environment or override."""
        if self.DOCS_ENABLED is not None:
            return self.DOCS_ENABLED
        return self.is_development


def load_settings(**overrides) -> Settings:
    """Build settings, failing loudly when required keys are absent."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        missing = [".".join(str(p) for p in err["loc"]) for err in exc.errors() if err["type"] == "missing"]
        if missing:
            message = f"{', '.join(missing)} environment variable is not set"
        else:
            message = f"Invalid configuration: {exc}"
        # Logging isn't configured yet; loguru's default stderr sink still works
        logger.error(message)
        raise ConfigurationError(message, details={"missing": missing}) from exc


settings = load_settings()
