"""
Configuration and environment loading for Blind Chess.

- Loads settings.yml (YAML) from repo root if present; falls back to environment variables
  (a local .env is loaded first), then to defaults.
- Exposes SETTINGS with the keys used by the simulator, server and CLIs.
"""
from dataclasses import dataclass
import logging
import os
from typing import Any, Callable

import yaml
from dotenv import load_dotenv

load_dotenv()

log = logging.getLogger("config")


def _repo_root() -> str:
    # this file: src/blindchess/config.py → repo root is two levels up
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def _load_yaml(path: str) -> dict:
    if not os.path.isfile(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        log.warning("Ignoring unreadable settings file %s", path, exc_info=True)
        return {}
    return data if isinstance(data, dict) else {}


_cfg = _load_yaml(os.environ.get("BLINDCHESS_SETTINGS", os.path.join(_repo_root(), "settings.yml")))


def _get(name: str, default: Any, cast: Callable[[Any], Any] | None = None) -> Any:
    raw = _cfg.get(name, os.environ.get(name))
    if raw is None:
        return default
    if not cast:
        return raw
    try:
        return cast(raw)
    except (TypeError, ValueError):
        log.warning("Invalid value for %s: %r; using %r", name, raw, default)
        return default


@dataclass(frozen=True)
class Settings:
    # Reconciliation
    default_policy: str

    # Logging / service knobs
    log_level: str
    session_ttl_s: float
    moves_dir: str


SETTINGS = Settings(
    default_policy=str(_get("BLINDCHESS_POLICY", "seek-next")),
    log_level=str(_get("BLINDCHESS_LOG_LEVEL", "INFO")).upper(),
    session_ttl_s=float(_get("BLINDCHESS_SESSION_TTL_S", 3600.0, cast=float)),
    moves_dir=str(_get("BLINDCHESS_MOVES_DIR", ".")),
)


def parse_log_level(name: str | None) -> int:
    name = (name or SETTINGS.log_level or "INFO").upper()
    return getattr(logging, name, logging.INFO)
