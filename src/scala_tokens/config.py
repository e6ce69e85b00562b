import logging
import os

_TRUTHY = {"1", "true", "yes", "on"}


def get_log_level() -> int:
    name = os.getenv("SCALA_TOKENS_LOG_LEVEL", "WARNING").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def get_default_sort() -> bool:
    return os.getenv("SCALA_TOKENS_SORT", "").strip().lower() in _TRUTHY
