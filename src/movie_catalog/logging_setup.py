import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

def resolve_level(level: Optional[str] = None) -> int:
    """
    Turn a level name into a logging level.
    - Uses APP_LOG_LEVEL env if level is None (default INFO).
    - Unknown names fall back to INFO.
    """
    level_name = (level or os.getenv("APP_LOG_LEVEL") or "INFO").upper()
    level_value = logging.getLevelName(level_name)
    return level_value if isinstance(level_value, int) else logging.INFO


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure a single console handler via logging.basicConfig.

    basicConfig is a no-op once the root logger has handlers (e.g. under
    uvicorn or pytest), so only the package logger level is forced here.
    """
    level_value = resolve_level(level)

    logging.basicConfig(
        level=level_value,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for name in ("movie_catalog", "api"):
        logging.getLogger(name).setLevel(level_value)
