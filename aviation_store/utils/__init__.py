"""Configuration utilities for the aviation record store."""

from .config import StoreConfig, configure_logging, get_config, load_config, reset_config

__all__ = [
    "StoreConfig",
    "configure_logging",
    "get_config",
    "load_config",
    "reset_config",
]
