"""Application configuration settings"""

import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


def _optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    return float(raw)


class Config:
    # Environment
    TESTING = os.getenv("TESTING", "false").lower() in _TRUTHY
    DEBUG = os.getenv("DEBUG", "false").lower() in _TRUTHY

    # Feed service
    FEED_API_BASE_URL: str = os.getenv(
        "FEED_API_BASE_URL", "https://demo-deployment-latest-mt9h.onrender.com"
    )
    # "current" → messageId/postedBy, 255 chars
    # "legacy"  → id/accountId, 500 chars
    FEED_BACKEND_CONTRACT: str = os.getenv("FEED_BACKEND_CONTRACT", "current")

    # Empty means no timeout: a request runs until it completes or fails
    HTTP_TIMEOUT_SECONDS: Optional[float] = _optional_float(
        os.getenv("HTTP_TIMEOUT_SECONDS")
    )

    # Re-read the whole feed after each successful create/update/delete
    REFRESH_AFTER_MUTATION: bool = (
        os.getenv("REFRESH_AFTER_MUTATION", "true").lower() in _TRUTHY
    )

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH: Optional[str] = os.getenv("LOG_PATH") or None
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )


class DevelopmentConfig(Config):
    """Development configuration"""

    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestingConfig(Config):
    """Testing configuration"""

    TESTING = True
    FEED_API_BASE_URL = "http://feed.test"
    FEED_BACKEND_CONTRACT = "current"
    HTTP_TIMEOUT_SECONDS = None
    REFRESH_AFTER_MUTATION = True


class ProductionConfig(Config):
    """Production configuration"""

    pass


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env=None):
    """Get configuration based on environment"""
    if env is None:
        env = os.getenv("FEED_ENV", "development")
    return config.get(env, config["default"])
