"""Utility helpers."""

from tipster.utils.helpers import camel_to_snake, ensure_dir, snake_to_camel, utc_now
from tipster.utils.logs import configure_logging

__all__ = ["camel_to_snake", "configure_logging", "ensure_dir", "snake_to_camel", "utc_now"]
