from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from .persistence import DEFAULT_STORAGE_KEY
from .seed import DEFAULT_SEED_TITLE, DEFAULT_SEED_URL


_TRUE_WORDS = ("1", "true", "yes", "y", "on")
_FALSE_WORDS = ("0", "false", "no", "n", "off")


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None or v == "":
        return default
    return v.strip().lower() in _TRUE_WORDS


def _env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    return default if v is None else v


def _default_db_path() -> str:
    return str(Path.home() / ".quicklink" / "links.sqlite")


@dataclass
class Settings:
    # Storage
    db_path: str = ""
    storage_key: str = DEFAULT_STORAGE_KEY

    # First run
    seed: bool = True
    seed_title: str = DEFAULT_SEED_TITLE
    seed_url: str = DEFAULT_SEED_URL

    # Debug: every save fails (exercise rollback without touching storage)
    simulate_save_failure: bool = False

    # Logging / UX
    log_level: str = "WARNING"
    no_color: bool = False

    def __post_init__(self) -> None:
        if not self.db_path:
            self.db_path = _default_db_path()

    @staticmethod
    def from_env() -> "Settings":
        s = Settings()
        s.db_path = _env_str("QUICKLINK_DB_PATH", s.db_path) or _default_db_path()
        s.storage_key = _env_str("QUICKLINK_STORAGE_KEY", s.storage_key)

        s.seed = _env_bool("QUICKLINK_SEED", s.seed)
        s.seed_title = _env_str("QUICKLINK_SEED_TITLE", s.seed_title)
        s.seed_url = _env_str("QUICKLINK_SEED_URL", s.seed_url)

        s.simulate_save_failure = _env_bool("QUICKLINK_SIMULATE_SAVE_FAILURE", s.simulate_save_failure)

        s.log_level = _env_str("QUICKLINK_LOG_LEVEL", s.log_level)
        s.no_color = _env_bool("QUICKLINK_NO_COLOR", s.no_color)
        return s

    @staticmethod
    def from_file(path: Path) -> "Settings":
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        s = Settings.from_env()
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must hold a mapping of settings")
        known = {f.name for f in fields(Settings)}
        for k, v in data.items():
            if k in known:
                setattr(s, k, _coerce_setting(k, getattr(s, k), v))
        return s


def _coerce_setting(name: str, current: object, value: object) -> object:
    """Match a YAML value to the type of the setting it overrides, or raise ValueError."""
    if isinstance(current, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str) and value.strip().lower() in _TRUE_WORDS + _FALSE_WORDS:
            return value.strip().lower() in _TRUE_WORDS
    elif isinstance(current, str):
        if isinstance(value, str) and (value or name != "db_path"):
            return value
    raise ValueError(f"Invalid value for setting {name!r}: {value!r}")


def load_settings(config_path: Optional[str]) -> Settings:
    if config_path:
        return Settings.from_file(Path(config_path))
    return Settings.from_env()
