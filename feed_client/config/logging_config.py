import logging
from logging.handlers import RotatingFileHandler
import sys
from pathlib import Path
from contextvars import ContextVar
from feed_client.config.settings import Config

NO_CORRELATION_ID = "NO Correlation ID"

# Context variable to carry the correlation ID of the current feed operation
correlation_id_var: ContextVar[str] = ContextVar(
    "correlation_id", default=NO_CORRELATION_ID
)


class CorrelationIdFilter(logging.Filter):
    """Logging filter to add correlation ID to log records."""

    def filter(self, record):
        record.correlation_id = correlation_id_var.get()
        return True


class SafeFormatter(logging.Formatter):
    """Formatter that ensures correlation_id always exists."""

    def format(self, record):
        if not hasattr(record, "correlation_id"):
            record.correlation_id = NO_CORRELATION_ID
        return super().format(record)


def _is_configured(root: logging.Logger) -> bool:
    return any(
        isinstance(f, CorrelationIdFilter) for h in root.handlers for f in h.filters
    )


def setup_logging(
    level: str = "INFO", log_file: str | None = None, log_format: str | None = None
):
    root = logging.getLogger()
    if _is_configured(root):
        # Handlers from an earlier call stay; only the level follows config
        logging.getLogger("feed_client").setLevel(
            getattr(logging, level.upper(), logging.INFO)
        )
        return root
    root.setLevel(logging.WARNING)  # Keep third-party loggers quiet
    formatter = SafeFormatter(log_format or Config.LOG_FORMAT)

    logger_handler = logging.StreamHandler(sys.stdout)
    logger_handler.setFormatter(formatter)
    logger_handler.addFilter(CorrelationIdFilter())
    root.addHandler(logger_handler)

    # Set up file logging if log_file provided with rotation
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=10 * 1024 * 1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(CorrelationIdFilter())
        root.addHandler(file_handler)

    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.getLogger("feed_client").setLevel(
        getattr(logging, level.upper(), logging.INFO)
    )
    logging.getLogger(__name__).info("Logging is set up.")

    return root
