"""
Central configuration loader.
Reads from environment variables (via .env).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# ---------------------------------------------------------------------------
# Load .env from repo root (if present)
# ---------------------------------------------------------------------------
_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env")


def _get(key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    val = os.getenv(key, default)
    if required and not val:
        raise EnvironmentError(f"Missing required environment variable: {key}")
    return val


# ---------------------------------------------------------------------------
# HTTP server
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ServerConfig:
    host: str
    port: int
    reload: bool
    log_level: str


def get_server_config() -> ServerConfig:
    return ServerConfig(
        host=_get("SERVER_HOST", default="0.0.0.0"),  # type: ignore[arg-type]
        port=int(_get("PORT", default="3000")),  # type: ignore[arg-type]
        reload=_get("SERVER_RELOAD", default="false").lower() in ("1", "true", "yes"),  # type: ignore[union-attr]
        log_level=_get("LOG_LEVEL", default="INFO").upper(),  # type: ignore[union-attr]
    )


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class CorsConfig:
    origins: list[str]
    methods: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE")
    headers: tuple[str, ...] = ("Content-Type", "Authorization")


def get_cors_config() -> CorsConfig:
    raw = _get("CORS_ORIGINS", default="*")
    origins = [o.strip() for o in raw.split(",") if o.strip()]  # type: ignore[union-attr]
    return CorsConfig(origins=origins or ["*"])


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
def get_repo_root() -> Path:
    return _REPO_ROOT


def get_db_path() -> Path:
    override = _get("DATABASE_PATH")
    if override:
        return Path(override)
    return _REPO_ROOT / "database" / "database.db"
