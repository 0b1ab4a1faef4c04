"""Logging setup shared by the API and the scripts."""

from __future__ import annotations

import logging

from servicedesk.config import get_settings

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger using ``level`` or the configured default."""

    resolved = (level or get_settings().log_level or "INFO").upper()
    logging.basicConfig(level=resolved, format=_LOG_FORMAT)
    logging.getLogger("servicedesk").setLevel(resolved)


__all__ = ["configure_logging"]
