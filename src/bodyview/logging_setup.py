"""
Logging configuration for the bodyview command line.
"""

import logging
import os
import sys
from typing import Final, Optional

LOG_FORMAT: Final[str] = "%(levelname)s [%(name)s] %(message)s"
VALID_LEVELS: Final[tuple] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_stderr_handler: Optional[logging.Handler] = None


def configure_logging(level: Optional[str] = None) -> str:
    """
    Attach a stderr handler to the root logger.

    The LOG_LEVEL environment variable takes precedence over *level*.
    Falls back to WARNING when neither names a valid level. Calling it again
    only changes the level.

    Returns:
        The level name that was applied
    """

    global _stderr_handler

    env_level = os.environ.get("LOG_LEVEL", "").upper()
    if env_level in VALID_LEVELS:
        effective = env_level
    elif level and level.upper() in VALID_LEVELS:
        effective = level.upper()
    else:
        effective = "WARNING"

    root = logging.getLogger()
    root.setLevel(getattr(logging, effective))

    if _stderr_handler is None:
        _stderr_handler = logging.StreamHandler(sys.stderr)
        _stderr_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(_stderr_handler)

    return effective
