from __future__ import annotations

import logging
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

USER_CONFIG_PATH = Path.home() / ".taskdeck_config.yaml"

DEFAULT_THEME = "dark-olive"
DEFAULT_STATUS_TTL = 4.0
DEFAULT_LOG_LEVEL = "WARNING"

logger = logging.getLogger("taskdeck.config")


def _load_config() -> Dict[str, Any]:
    if not USER_CONFIG_PATH.exists():
        return {}
    try:
        data = yaml.safe_load(USER_CONFIG_PATH.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", USER_CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _save_config(data: Dict[str, Any]) -> None:
    if not data:
        if USER_CONFIG_PATH.exists():
            USER_CONFIG_PATH.unlink()
        return
    USER_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    USER_CONFIG_PATH.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")


def _set_value(key: str, value: Any) -> None:
    data = _load_config()
    if value in (None, ""):
        data.pop(key, None)
    else:
        data[key] = value
    _save_config(data)


def _get_text(key: str) -> str:
    value = _load_config().get(key, "")
    return str(value).strip() if value is not None else ""


def get_user_lang() -> str:
    return _get_text("lang")


def set_user_lang(value: str) -> None:
    _set_value("lang", (value or "").strip())


def get_theme() -> str:
    return _get_text("theme") or DEFAULT_THEME


def set_theme(value: str) -> None:
    _set_value("theme", (value or "").strip())


def get_data_path() -> Optional[Path]:
    """Data file location: TASKDECK_DATA, then the config file, else None."""
    raw = os.getenv("TASKDECK_DATA") or _get_text("data_path")
    return Path(raw).expanduser() if raw else None


def set_data_path(value: Optional[str]) -> None:
    _set_value("data_path", str(value).strip() if value else "")


def get_status_ttl() -> float:
    raw = _load_config().get("status_ttl")
    if raw is None:
        return DEFAULT_STATUS_TTL
    try:
        ttl = float(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid status_ttl %r, using %s", raw, DEFAULT_STATUS_TTL)
        return DEFAULT_STATUS_TTL
    return ttl if ttl > 0 else DEFAULT_STATUS_TTL


def set_status_ttl(value: Optional[float]) -> None:
    _set_value("status_ttl", float(value) if value else None)


def get_log_level() -> str:
    raw = os.getenv("TASKDECK_LOG_LEVEL") or _get_text("log_level") or DEFAULT_LOG_LEVEL
    level = raw.strip().upper()
    return level if isinstance(logging.getLevelName(level), int) else DEFAULT_LOG_LEVEL


def set_log_level(value: str) -> None:
    _set_value("log_level", (value or "").strip().upper())
