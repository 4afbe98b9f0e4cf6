from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    whatsapp_window_hours: int = 24
    window_proactive_hours: int = 2
    live_preview_threshold: int = 5000
    age_min: int = 1
    age_max: int = 119
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        settings = cls(
            whatsapp_window_hours=_int_env("WHATSAPP_WINDOW_HOURS", 24),
            window_proactive_hours=_int_env("WINDOW_PROACTIVE_HOURS", 2),
            live_preview_threshold=_int_env("LIVE_PREVIEW_THRESHOLD", 5000),
            age_min=_int_env("AGE_MIN", 1),
            age_max=_int_env("AGE_MAX", 119),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
        if settings.whatsapp_window_hours <= 0:
            raise ValueError("WHATSAPP_WINDOW_HOURS must be positive")
        if settings.window_proactive_hours < 0:
            raise ValueError("WINDOW_PROACTIVE_HOURS must not be negative")
        if settings.live_preview_threshold < 0:
            raise ValueError("LIVE_PREVIEW_THRESHOLD must not be negative")
        if settings.age_min > settings.age_max:
            raise ValueError("AGE_MIN must not exceed AGE_MAX")
        return settings


@lru_cache()
def get_settings() -> Settings:
    """Load settings from the environment, reading a .env file if present."""
    load_dotenv()
    settings = Settings.from_env()
    logger.debug("Settings loaded: %s", settings)
    return settings


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
