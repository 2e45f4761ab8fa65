"""Configuration for msgkey-navigator checks."""

from rules.config import (
    CONFIG_FILENAME,
    ChecksConfig,
    ConfigError,
    MsgKeysConfig,
    load_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "ChecksConfig",
    "ConfigError",
    "MsgKeysConfig",
    "load_config",
]
