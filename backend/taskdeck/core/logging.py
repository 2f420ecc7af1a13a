"""Logging setup for the API process."""

import logging
import sys

from pythonjsonlogger import jsonlogger

NOISY_LOGGERS = ("uvicorn.access", "urllib3", "httpx", "httpcore")


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Install a single stdout handler on the root logger.

    ``fmt`` is ``"json"`` for one JSON object per line, anything else gives
    plain text. Safe to call more than once; old handlers are removed.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    if fmt.lower() == "json":
        formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    handler.setFormatter(formatter)
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
