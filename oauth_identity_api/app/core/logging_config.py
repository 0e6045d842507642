"""
Process-wide logging for the identity API.

Services and repositories log through ``logging.getLogger(__name__)``
and never configure handlers themselves; ``create_app`` calls
``setup_logging`` once with ``LOG_LEVEL`` and ``LOG_FILE`` from the
settings.  Records go to stderr and, when ``LOG_FILE`` is set, to that
file as well.  Passwords and hashes are never passed to a logger, so
the handlers need no redaction.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach the identity API's handlers to the root logger.

    Does nothing when the root logger already has handlers, which is the
    case under pytest and when a host application has configured
    logging first.

    Parameters
    ----------
    level : str
        Name of the minimum level, e.g. ``"WARNING"`` to keep only
        rejected tokens and failed lookups.  Unknown names mean ``INFO``.
    logfile : Optional[str]
        Extra destination for the same records, appended to in UTF-8.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
