"""Configuration and logging setup."""

from feed_client.config.settings import Config, get_config
from feed_client.config.logging_config import correlation_id_var, setup_logging

__all__ = [
    "Config",
    "get_config",
    "correlation_id_var",
    "setup_logging",
]
