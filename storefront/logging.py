"""
Logging for the cart service.

    from storefront.logging import get_logger
    logger = get_logger(__name__)

LOG_LEVEL picks the level; on Vercel the timestamp is left to the platform.
"""

import logging
import os
import sys
from functools import cache

_CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})


def _configure_root_logger() -> None:
    root = logging.getLogger()
    if root.handlers:
        return

    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    fmt = "%(levelname)s - %(name)s - %(message)s"
    if os.environ.get("VERCEL") != "1":
        fmt = "%(asctime)s - " + fmt

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)
    root.setLevel(level)

    # Upstash and Supabase both talk over httpx
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def sanitize_id_for_logging(id_value: str | None) -> str:
    """
    Render a session or product id safe for a log line.

    Control characters are escaped (CWE-117) and only the first 8
    characters are kept, since session ids act as bearer secrets.
    """
    if not id_value:
        return "N/A"
    return str(id_value).translate(_CONTROL_CHARS)[:8]
