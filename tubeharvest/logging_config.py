"""Logging setup shared by the ``run`` and ``serve`` commands."""

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Google client internals log every discovery lookup and request.
NOISY_LOGGERS = ("googleapiclient.discovery", "googleapiclient.discovery_cache", "urllib3")


def setup_logging(log_level: str = "INFO", log_file: str | None = None, verbose: bool = False) -> int:
    """Route logs to stdout (and ``log_file`` if given); returns the effective level."""
    level = logging.DEBUG if verbose else getattr(logging, log_level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT, handlers=handlers, force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return level
