from __future__ import annotations
import logging
import os

_TRUTHY = {"1", "true", "yes", "on"}

_DEFAULT_LOG_LEVEL = "WARNING"


def flag_from_env(var: str, default: bool = False) -> bool:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def get_log_level() -> int:
    """Level for the command-line tool, taken from CALC_LOG_LEVEL (name or number)."""
    raw = os.environ.get("CALC_LOG_LEVEL", _DEFAULT_LOG_LEVEL).strip()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    # getLevelName hands back a string for unknown names
    return level if isinstance(level, int) else logging.WARNING


def disasm_enabled() -> bool:
    """CALC_DISASM=1 logs every compiled formula listing at info level."""
    return flag_from_env("CALC_DISASM")
