# core/logging.py
from __future__ import annotations

import logging
import sys

_configured = False


def configure_logging(level: str = "INFO", *, force: bool = False) -> None:
    """
    Configure root logging once per process.
    Modules only fetch their logger: `logging.getLogger(__name__)`.
    """
    global _configured
    if _configured and not force:
        return

    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    root = logging.getLogger()
    if force:
        for handler in list(root.handlers):
            root.removeHandler(handler)

    # [YYYY-MM-DD HH:MM:SS][LEVEL][logger.name] message
    formatter = logging.Formatter(
        fmt="[{asctime}][{levelname}][{name}] {message}",
        datefmt="%Y-%m-%d %H:%M:%S",
        style="{",
    )
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(numeric_level)

    # httpx logs every request at INFO; keep it quiet unless debugging
    if numeric_level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)

    _configured = True
    logging.getLogger(__name__).info("Logging configured (level=%s)", level)
