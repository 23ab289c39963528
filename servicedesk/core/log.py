"""Logging setup shared by the app and the maintenance scripts."""

from __future__ import annotations

import logging

from .config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    settings = get_settings()
    resolved = (level or settings.log_level or "INFO").upper()
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=resolved, format=LOG_FORMAT)
    else:
        root.setLevel(resolved)
