import logging
import sys

from core.config import settings

_configured = False


def setup_logging() -> None:
    """Attach one stdout handler to the root logger; safe to call repeatedly."""
    global _configured
    if _configured:
        return

    level_name = settings.LOG_LEVEL.upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt, datefmt))
    handler.setLevel(level)
    root.addHandler(handler)

    _configured = True
    logging.getLogger(__name__).info("Logging initialized at %s", level_name)
