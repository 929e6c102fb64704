"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Raised when mandatory configuration is missing."""


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str
    database_url: str
    gemini_model: str = "gemini-2.5-flash"
    gemini_timeout: float = 60.0
    worker_port: int = 9000
    market_location: str = "Batumi, Georgia"
    market_lat: Optional[float] = None
    market_lng: Optional[float] = None
    fallback_address: str = "Batumi"
    subject_marker: str = "international"
    history_limit: int = 1000
    targets_file: Optional[str] = None


def _number_env(name: str, default: str, cast: Callable[[str], Any]) -> Any:
    raw = os.getenv(name) or default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be numeric, got {raw!r}") from exc


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("%s=%r is not numeric; ignoring it.", name, raw)
        return None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    gemini_api_key = os.getenv("GEMINI_API_KEY", "")
    database_url = os.getenv("DATABASE_URL", "")
    gemini_model = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    gemini_timeout = _number_env("GEMINI_TIMEOUT", "60", float)
    worker_port = _number_env("WORKER_PORT", "9000", int)
    market_location = os.getenv("MARKET_LOCATION", "Batumi, Georgia")
    fallback_address = os.getenv("FALLBACK_ADDRESS", "Batumi")
    subject_marker = os.getenv("SUBJECT_MARKER", "international").strip().lower()
    history_limit = _number_env("HISTORY_LIMIT", "1000", int)
    targets_file = os.getenv("MARKET_TARGETS_FILE") or None

    if not database_url:
        logger.warning("DATABASE_URL is not set; database operations will fail.")
    if not gemini_api_key:
        logger.warning("GEMINI_API_KEY is not configured; market sync requests will fail.")

    return Settings(
        gemini_api_key=gemini_api_key,
        database_url=database_url,
        gemini_model=gemini_model,
        gemini_timeout=gemini_timeout,
        worker_port=worker_port,
        market_location=market_location,
        market_lat=_optional_float("MARKET_LAT"),
        market_lng=_optional_float("MARKET_LNG"),
        fallback_address=fallback_address,
        subject_marker=subject_marker,
        history_limit=history_limit,
        targets_file=targets_file,
    )
