"""Configuration management for the user API service."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml

from .database import resolve_database_path

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8787
DEFAULT_LOG_LEVEL = "info"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the HTTP service."""

    database_path: Path
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL

    @staticmethod
    def from_dict(data: Dict[str, object], base_path: Path | None = None) -> "Settings":
        """Create :class:`Settings` from raw dictionary data."""

        raw_db_path = data.get("database_path")
        if raw_db_path:
            candidate = Path(str(raw_db_path)).expanduser()
            if not candidate.is_absolute() and base_path is not None:
                candidate = base_path / candidate
            database_path = candidate.resolve(strict=False)
        else:
            database_path = resolve_database_path(None)

        return Settings(
            database_path=database_path,
            host=str(data.get("host", DEFAULT_HOST)),
            port=int(data.get("port", DEFAULT_PORT)),
            log_level=str(data.get("log_level", DEFAULT_LOG_LEVEL)).lower(),
        )

    def with_environment(self, environ: Mapping[str, str]) -> "Settings":
        """Return a copy with ``USERAPI_*`` environment overrides applied."""

        overrides: Dict[str, object] = {}
        if environ.get("USERAPI_DB_PATH"):
            overrides["database_path"] = resolve_database_path(environ["USERAPI_DB_PATH"])
        if environ.get("USERAPI_HOST"):
            overrides["host"] = environ["USERAPI_HOST"].strip()
        if environ.get("USERAPI_PORT"):
            overrides["port"] = int(environ["USERAPI_PORT"])
        if environ.get("USERAPI_LOG_LEVEL"):
            overrides["log_level"] = environ["USERAPI_LOG_LEVEL"].strip().lower()
        return replace(self, **overrides)


def resolve_config_path(env_value: Optional[str]) -> Path:
    """Resolve the path to the optional YAML configuration file."""
    if env_value:
        candidate = Path(env_value).expanduser().resolve(strict=False)
    else:
        candidate = (Path(__file__).resolve().parent.parent / "config" / "userapi.yaml").resolve(strict=False)
    return candidate


def load_settings_file(config_path: Path) -> Settings:
    """Load settings from a YAML file."""
    with config_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}

    if not isinstance(raw, dict):
        raise ValueError("Configuration file must contain a mapping at the top level")

    return Settings.from_dict(raw, base_path=config_path.parent)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from the YAML file (when present) and the environment."""

    if environ is None:
        environ = os.environ

    config_path = resolve_config_path(environ.get("USERAPI_CONFIG"))
    if config_path.is_file():
        settings = load_settings_file(config_path)
    else:
        settings = Settings(database_path=resolve_database_path(None))
    return settings.with_environment(environ)


__all__ = ["Settings", "load_settings", "load_settings_file", "resolve_config_path"]
