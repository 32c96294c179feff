"""
Configuration
=============
Central registry of global constants and environment-driven settings.

Environment:
    ANTHROPIC_API_KEY: Key for the insight service. Without it, insight
        requests log an error and show nothing.
    LINEARLAB_MODEL: Model used for insights.
    LINEARLAB_MAX_TOKENS: Upper bound on the length of one insight response.
    LINEARLAB_SHARE_BASE: Base URL that shared links point to.
    LINEARLAB_LOG_LEVEL: Console and file log level name (default INFO).
    LINEARLAB_LOG_FILE: Optional path of a log file.
"""
import logging
import os

logger = logging.getLogger(__name__)


def env_int(name: str, default: int) -> int:
    """Positive integer from the environment; unset or unusable values give `default`."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer, using {default}.")
        return default
    if value <= 0:
        logger.warning(f"{name}={value} must be positive, using {default}.")
        return default
    return value


API_KEY_ENV: str = "ANTHROPIC_API_KEY"

DEFAULT_MODEL: str = "claude-sonnet-4-5"
DEFAULT_MAX_TOKENS: int = 1024

INSIGHT_MODEL: str = os.environ.get("LINEARLAB_MODEL", DEFAULT_MODEL)
INSIGHT_MAX_TOKENS: int = env_int("LINEARLAB_MAX_TOKENS", DEFAULT_MAX_TOKENS)

SHARE_BASE_URL: str = os.environ.get("LINEARLAB_SHARE_BASE", "https://linearlab.app/")

LOG_LEVEL: str = os.environ.get("LINEARLAB_LOG_LEVEL", "INFO")
LOG_FILE: str | None = os.environ.get("LINEARLAB_LOG_FILE") or None

# |det| below this is shown as (nearly) singular
SINGULAR_THRESHOLD: float = 0.01

# Largest magnitude of a matrix entry or vector component; the editors use the same range
MAX_ENTRY: float = 1e6


def get_api_key() -> str | None:
    """Read the insight service key at call time, so it can be set after import."""
    return os.environ.get(API_KEY_ENV) or None
