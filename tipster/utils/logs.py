"""Loguru sink setup."""

from __future__ import annotations

import sys

from loguru import logger


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru sinks with a single stderr sink at ``level``."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | "
        "<cyan>{extra[component]}</cyan> | {message}",
        filter=lambda record: record["extra"].setdefault("component", "tipster") is not None,
    )
