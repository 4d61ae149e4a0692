"""Configuration module for tipster."""

from tipster.config.loader import get_config_path, load_config, save_config
from tipster.config.schema import MessageDefinition, MessageOverride, TipsterConfig

__all__ = [
    "MessageDefinition",
    "MessageOverride",
    "TipsterConfig",
    "get_config_path",
    "load_config",
    "save_config",
]
