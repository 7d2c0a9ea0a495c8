"""
Process-wide logging setup.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def resolve_level(level: str) -> int:
    resolved = logging.getLevelName((level or "").upper())
    if not isinstance(resolved, int):
        return logging.INFO
    return resolved


def configure_logging(level: str = "INFO") -> None:
    resolved = resolve_level(level)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    # basicConfig leaves the level alone when the root logger already has handlers.
    logging.getLogger().setLevel(resolved)
