from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

# The API only ever listens on the loopback interface.
HOST = "127.0.0.1"
DEFAULT_PORT = 8745
DATA_FILENAME = "data.json"


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - VISOR_DATA_DIR: directory holding data.json. Default '~/.visor'
    - VISOR_PORT: TCP port on 127.0.0.1. Default 8745
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - VISOR_UNIQUE_SLUGS: 'false' to allow several projects with the same slug (default: true)
    - LOG_LEVEL: console log level name. Default 'INFO'
    - VISOR_LOG_FILE: optional path of a debug log file
    """

    data_dir: Path
    port: int
    cors_allow_origins: List[str]
    unique_slugs: bool
    log_level: str
    log_file: Optional[str]

    @property
    def data_file(self) -> Path:
        return self.data_dir / DATA_FILENAME


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_port(value: str) -> int:
    try:
        port = int(value.strip())
    except ValueError:
        return DEFAULT_PORT
    if not (0 < port < 65536):
        return DEFAULT_PORT
    return port


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    data_dir = Path(_get_env("VISOR_DATA_DIR", "~/.visor").strip()).expanduser()
    port = _parse_port(_get_env("VISOR_PORT", str(DEFAULT_PORT)))
    origins = _parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*"))
    unique_slugs = _parse_bool(_get_env("VISOR_UNIQUE_SLUGS", "true"), True)
    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()
    log_file = os.getenv("VISOR_LOG_FILE") or None

    return Settings(
        data_dir=data_dir,
        port=port,
        cors_allow_origins=origins or ["*"],
        unique_slugs=unique_slugs,
        log_level=log_level,
        log_file=log_file,
    )
