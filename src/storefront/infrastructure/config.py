"""Runtime settings, read from the environment (and a ``.env`` file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# When installed in editable mode the project root is the repo root.
ROOT_DIR = Path(__file__).resolve().parents[3]

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_log_level(default: str = "WARNING") -> str:
    level = (_get_env("LOG_LEVEL", default=default) or default).upper()
    return level if level in LOG_LEVELS else default


def _get_float(*keys: str, default: float) -> float:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return float(v)


@dataclass(frozen=True)
class Settings:
    api_url: str
    image_base_url: str
    data_dir: Path
    http_timeout: float
    log_level: str
    log_format: str


def load_settings() -> Settings:
    load_dotenv(dotenv_path=ROOT_DIR / ".env")
    return Settings(
        api_url=(_get_env("STOREFRONT_API_URL", default="http://localhost:8080/api") or "").rstrip("/"),
        image_base_url=_get_env("STOREFRONT_IMAGE_BASE_URL", default="http://localhost:8080") or "",
        data_dir=Path(_get_env("STOREFRONT_DATA_DIR", default=str(ROOT_DIR / "data")) or "data"),
        http_timeout=_get_float("STOREFRONT_HTTP_TIMEOUT", default=10.0),
        log_level=_get_log_level(),
        log_format=_get_env("LOG_FORMAT", default=DEFAULT_LOG_FORMAT) or DEFAULT_LOG_FORMAT,
    )
