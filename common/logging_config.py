"""
Logging configuration shared by every module of the package.

The transformation engine logs only at DEBUG (iteration counts, fallbacks)
and the map launcher at WARNING. Records go to stderr so that the report
printed by ``show-in-map`` on stdout stays machine readable. Setting
``GEODESY_LOG_LEVEL`` (e.g. ``DEBUG``) overrides the default level.
"""

import logging
import os
import sys

LOG_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'
LEVEL_ENV_VAR = "GEODESY_LOG_LEVEL"


def _default_level() -> int:
    name = os.environ.get(LEVEL_ENV_VAR, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.WARNING
    return level if isinstance(level, int) else logging.WARNING


def get_logger(name: str, level: int = None) -> logging.Logger:
    """Return the logger ``name`` with a single stderr handler attached.

    Parameters
    ----------
    name : str
        Logger name (typically __name__).
    level : int, optional
        Explicit level; defaults to ``GEODESY_LOG_LEVEL`` or WARNING.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(handler)

    logger.setLevel(_default_level() if level is None else level)
    return logger
