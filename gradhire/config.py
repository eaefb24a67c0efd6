"""Load client settings from .env and config/client.yaml."""
from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from gradhire.log import get_logger

log = get_logger(__name__)

load_dotenv()

PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = PROJECT_ROOT / "config"
SETTINGS_PATH: Path = CONFIG_DIR / "client.yaml"
DATA_DIR: Path = PROJECT_ROOT / "data"

DEFAULT_BASE_URL = "https://web-production-0b80c.up.railway.app"

# Country codes the jobs backend accepts, with their display labels.
COUNTRIES: dict[str, str] = {
    "in": "India",
    "us": "USA (Visa Friendly)",
}


@dataclass
class Settings:
    base_url: str = DEFAULT_BASE_URL
    upload_timeout: float = 20.0
    jobs_timeout: float = 60.0
    optimize_timeout: float = 45.0
    download_timeout: float = 45.0
    watchdog_seconds: float = 30.0
    default_country: str = "in"
    data_dir: Path = DATA_DIR
    work_dir: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))
    max_workers: int = 4


_NUMERIC = {
    "upload_timeout", "jobs_timeout", "optimize_timeout",
    "download_timeout", "watchdog_seconds",
}


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _coerce(name: str, value: Any) -> Any:
    if name in _NUMERIC:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"{name} must be a positive number, got {value!r}")
        return float(value)
    if name == "max_workers":
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(f"max_workers must be a positive integer, got {value!r}")
        return value
    if name in ("data_dir", "work_dir"):
        if not isinstance(value, str):
            raise ValueError(f"{name} must be a path string, got {value!r}")
        return Path(value).expanduser()
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string, got {value!r}")
    return value.strip()


def load_settings(path: Path | None = None) -> Settings:
    """Build Settings from defaults, the YAML file (if any), then env overrides."""
    path = path or SETTINGS_PATH
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path.name} must contain a mapping at the top level")

    known = {f.name for f in fields(Settings)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            log.warning("Ignoring unknown setting %r in %s", key, path.name)
            continue
        kwargs[key] = _coerce(key, value)

    env_url = get_env("GRADHIRE_BASE_URL")
    if env_url:
        kwargs["base_url"] = env_url
    env_country = get_env("GRADHIRE_COUNTRY")
    if env_country:
        kwargs["default_country"] = env_country.lower()

    settings = Settings(**kwargs)
    if settings.default_country not in COUNTRIES:
        raise ValueError(
            f"default_country must be one of {sorted(COUNTRIES)}, got {settings.default_country!r}"
        )
    return settings


def ensure_dirs(settings: Settings) -> None:
    for d in (settings.data_dir, settings.work_dir):
        d.mkdir(parents=True, exist_ok=True)
