from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

DEFAULT_TIMEOUT = 60.0


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("true", "1", "yes")


def _env_list(name: str) -> tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _env_seconds(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        seconds = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r, not a number; using %s", name, raw, default)
        return default
    if seconds <= 0:
        logger.warning("Ignoring %s=%r, must be positive; using %s", name, raw, default)
        return default
    return seconds


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = os.getenv("LLM_API_KEY", "")
    model: str = os.getenv("LLM_MODEL", "llama-3.3-70b-versatile")
    base_url: str | None = os.getenv("LLM_BASE_URL") or None
    # Full recipes and 21-recipe meal plans take a while to generate
    timeout: float = _env_seconds("LLM_TIMEOUT", DEFAULT_TIMEOUT)
    enabled: bool = _env_flag("LLM_ENABLED", "true")
    # Pool the model picks recipe images from; empty means no image section
    image_urls: tuple[str, ...] = _env_list("RECIPE_IMAGE_URLS")


DEFAULT_LLM_CONFIG = LLMConfig()
