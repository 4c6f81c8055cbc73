"""
Logging setup for the Punch Ledger Service.

Every module obtains its logger through ``get_logger(__name__)``.
"""

import logging
import sys

from punchclock.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("punchclock")
    root.addHandler(handler)
    root.setLevel(settings.LOG_LEVEL.upper())

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for the given module name.

    Loggers outside the ``punchclock`` namespace are parented under it so
    they share the same handler and level.
    """
    _configure_root()
    if not name.startswith("punchclock"):
        name = f"punchclock.{name}"
    return logging.getLogger(name)
