from __future__ import annotations
import logging
import os


# Defaults
_DEFAULT_MAX_DEPTH = 200
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_PROMPT = '> '


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def get_max_depth() -> int:
    return int_from_env('CILISP_MAX_DEPTH', _DEFAULT_MAX_DEPTH)


def get_log_level() -> int:
    raw = os.environ.get('CILISP_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    # unknown names fall back to the default rather than failing startup
    level = logging.getLevelName(raw)
    if isinstance(level, int):
        return level
    return logging.getLevelName(_DEFAULT_LOG_LEVEL)


def get_prompt() -> str:
    return os.environ.get('CILISP_PROMPT', _DEFAULT_PROMPT)
