"""
config.py — Application Configuration
======================================
Settings come from ALGOVIZ_* environment variables, with defaults for
everything:

    ALGOVIZ_HOST              bind address            (127.0.0.1)
    ALGOVIZ_PORT              bind port               (5000)
    ALGOVIZ_DEBUG             Flask debug mode        (false)
    ALGOVIZ_DEFAULT_SPEED_MS  hold time of a frame that names none (500)
    ALGOVIZ_TICK_INTERVAL_MS  browser poll interval   (100)
    ALGOVIZ_LOG_LEVEL         logging level name      (INFO)
    ALGOVIZ_LOG_FILE          optional rotating log file

A bad value is logged and replaced by its default.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

ENV_PREFIX = "ALGOVIZ_"


@dataclass(frozen=True)
class AppConfig:
    host:             str           = "127.0.0.1"
    port:             int           = 5000
    debug:            bool          = False
    default_speed_ms: int           = 500
    tick_interval_ms: int           = 100
    log_level:        str           = "INFO"
    log_file:         Optional[str] = None


def load_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Build an AppConfig from the environment (os.environ by default)."""
    env = os.environ if environ is None else environ
    defaults = AppConfig()

    return AppConfig(
        host=env.get(ENV_PREFIX + "HOST", defaults.host),
        port=_get_int(env, "PORT", defaults.port, min_value=1, max_value=65535),
        debug=_get_bool(env, "DEBUG", defaults.debug),
        default_speed_ms=_get_int(env, "DEFAULT_SPEED_MS", defaults.default_speed_ms, min_value=1, max_value=60_000),
        tick_interval_ms=_get_int(env, "TICK_INTERVAL_MS", defaults.tick_interval_ms, min_value=10, max_value=5_000),
        log_level=_get_level(env, "LOG_LEVEL", defaults.log_level),
        log_file=env.get(ENV_PREFIX + "LOG_FILE") or None,
    )


def _get_int(
    env: Mapping[str, str],
    key: str,
    default: int,
    *,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> int:
    """Fetch an integer value with optional clamping."""
    raw = env.get(ENV_PREFIX + key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning("Ignoring %s%s=%r: not an integer", ENV_PREFIX, key, raw)
        return default
    if min_value is not None:
        value = max(min_value, value)
    if max_value is not None:
        value = min(max_value, value)
    return value


def _get_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(ENV_PREFIX + key)
    if raw is None:
        return default
    text = raw.strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off", ""):
        return False
    logger.warning("Ignoring %s%s=%r: not a boolean", ENV_PREFIX, key, raw)
    return default


def _get_level(env: Mapping[str, str], key: str, default: str) -> str:
    raw = env.get(ENV_PREFIX + key)
    if raw is None:
        return default
    name = raw.strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        logger.warning("Ignoring %s%s=%r: unknown log level", ENV_PREFIX, key, raw)
        return default
    return name
