import logging
import os

logger = logging.getLogger(__name__)

# -----------------------------
# Settings (environment overrides)
# -----------------------------

def env_int(name: str, default: int) -> int:
    """Integer setting from the environment; a bad value falls back to the default."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer, using {default}")
        return default


LOG_LEVEL = os.environ.get("PATHGRAPH_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

DEFAULT_START = os.environ.get("PATHGRAPH_DEFAULT_START", "0")
GENERATOR_SIZE = env_int("PATHGRAPH_GENERATOR_SIZE", 1000)

# Edge list loaded into the API's graph at startup, if set
EDGE_FILE = os.environ.get("PATHGRAPH_EDGE_FILE")

HOST = os.environ.get("PATHGRAPH_HOST", "0.0.0.0")
PORT = env_int("PATHGRAPH_PORT", 8000)
