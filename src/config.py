"""
Runtime settings for the directory service.

Values come from environment variables, with a ``.env`` file in the project
root loaded first when present. Malformed values are logged and replaced by
their defaults so a bad variable never stops the service from starting.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3902
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    cors_origins: Tuple[str, ...] = ("*",)
    seed_sample_data: bool = False


def _load_env_file() -> None:
    env_path = Path(__file__).parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path, encoding="utf-8-sig")
    else:
        load_dotenv()


def _parse_port(raw: Optional[str]) -> int:
    if not raw:
        return DEFAULT_PORT
    try:
        port = int(raw)
    except (ValueError, TypeError) as e:
        logger.warning(f"Invalid PORT value: {raw}. Error: {e}. Using default: {DEFAULT_PORT}")
        return DEFAULT_PORT
    if not 0 < port < 65536:
        logger.warning(
            f"PORT value {port} is outside 1-65535. Using default: {DEFAULT_PORT}"
        )
        return DEFAULT_PORT
    return port


def _parse_log_level(raw: Optional[str]) -> str:
    if not raw:
        return DEFAULT_LOG_LEVEL
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        logger.warning(f"Unknown LOG_LEVEL value: {raw}. Using default: {DEFAULT_LOG_LEVEL}")
        return DEFAULT_LOG_LEVEL
    return level


def _parse_origins(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ("*",)
    origins = tuple(origin.strip() for origin in raw.split(",") if origin.strip())
    return origins or ("*",)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from ``environ``, or from the process environment and .env file."""
    if environ is None:
        _load_env_file()
        environ = os.environ

    return Settings(
        host=environ.get("HOST") or DEFAULT_HOST,
        port=_parse_port(environ.get("PORT")),
        log_level=_parse_log_level(environ.get("LOG_LEVEL")),
        cors_origins=_parse_origins(environ.get("CORS_ORIGINS")),
        seed_sample_data=environ.get("SEED_SAMPLE_DATA", "").lower() == "true",
    )
