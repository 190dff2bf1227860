"""Application logging with Loguru + webhook alerts."""

import logging
import sys
from pathlib import Path
from typing import Any

import httpx
from loguru import logger

from strapi_loader.core.config import settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[name]}:{function}:{line} | {message}"

_logging_configured = False


class InterceptHandler(logging.Handler):
    """Redirect stdlib logs (httpx, uvicorn, alembic) to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_name == "emit":
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _webhook_sink(message: Any) -> None:
    if not settings.ALERT_WEBHOOK_URL:
        return

    record = message.record
    name = record["extra"].get("name") or record.get("name", "strapi_loader")
    text = f"[{record['level'].name}] {name}:{record['function']}:{record['line']}\n{record['message']}"
    try:
        httpx.post(settings.ALERT_WEBHOOK_URL, json={"text": text}, timeout=5.0)
    except httpx.HTTPError:
        # Logging here would feed back into this sink
        pass


def resolve_level(raw: str | None, production: bool = False) -> str:
    """Map LOG_LEVEL onto a loguru level name; production never goes below INFO."""
    level = (raw or "INFO").strip().upper()
    level = {"WARN": "WARNING", "FATAL": "CRITICAL"}.get(level, level)
    if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
        level = "INFO"
    if production and level in {"TRACE", "DEBUG"}:
        level = "INFO"
    return level


def configure_logging() -> None:
    global _logging_configured

    if _logging_configured:
        return
    _logging_configured = True

    level = resolve_level(settings.LOG_LEVEL, production=settings.is_production)

    logger.remove()
    logger.configure(extra={"name": "strapi_loader"})
    logger.add(
        sys.stdout,
        level=level,
        format=LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    if settings.LOG_DIR:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / "strapi_loader.log",
            level=level,
            format=LOG_FORMAT,
            rotation="10 MB",
            retention="14 days",
            enqueue=True,
            backtrace=False,
            diagnose=False,
        )

    if settings.ALERT_WEBHOOK_URL:
        logger.add(_webhook_sink, level="ERROR", enqueue=True)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for logger_name in ["uvicorn", "uvicorn.error", "uvicorn.access"]:
        logging.getLogger(logger_name).handlers = [InterceptHandler()]
        logging.getLogger(logger_name).propagate = False

    # StrapiClient logs its own fetches; httpx would add a line per request
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logger.__class__:
    return logger.bind(name=name)


configure_logging()
