"""
innovation_core/config.py

Environment-driven settings for the loader, views and API.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List


DATA_DIR = Path(__file__).resolve().parents[1]
DEFAULT_SOURCE = str(DATA_DIR / "innovations.csv")
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_RANKING_SIZE = 12
DEFAULT_WORLD_ATLAS_URL = "https://unpkg.com/world-atlas@3/countries-110m.json"
DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


@dataclass(frozen=True)
class Settings:
    source: str = DEFAULT_SOURCE
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    ranking_size: int = DEFAULT_RANKING_SIZE
    world_atlas_url: str = DEFAULT_WORLD_ATLAS_URL
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _get_list_env(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None:
        return list(default)
    values = [part.strip() for part in raw.split(",") if part.strip()]
    return values or list(default)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings. Call ``get_settings.cache_clear()`` after changing the environment."""

    source = (os.getenv("INNOVATIONS_SOURCE") or "").strip() or DEFAULT_SOURCE
    return Settings(
        source=source,
        http_timeout=_get_float_env("INNOVATIONS_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
        ranking_size=_get_int_env("INNOVATIONS_RANKING_SIZE", DEFAULT_RANKING_SIZE),
        world_atlas_url=(os.getenv("INNOVATIONS_WORLD_ATLAS_URL") or "").strip() or DEFAULT_WORLD_ATLAS_URL,
        cors_origins=_get_list_env("INNOVATIONS_CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
    )
