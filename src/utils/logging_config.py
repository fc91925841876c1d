import logging
import sys
from pathlib import Path

import structlog

from src.config.config import config


class CustomFormatter(logging.Formatter):
    """Custom formatter that implements the format: [yyyy-mm-dd hh:mm:ss] [log_type] [class_name]: {message}"""

    def format(self, record):
        # Extract class name from the logger name
        class_name = record.name.split('.')[-1] if '.' in record.name else record.name

        # Format timestamp as yyyy-mm-dd hh:mm:ss
        timestamp = self.formatTime(record, '%Y-%m-%d %H:%M:%S')

        formatted_message = f"[{timestamp}] [{record.levelname}] [{class_name}]: {record.getMessage()}"

        # Add exception info if present
        if record.exc_info:
            formatted_message += '\n' + self.formatException(record.exc_info)

        return formatted_message


def ensure_logs_directory() -> Path:
    """Ensure the logs directory exists."""
    logs_dir = Path("logs")
    logs_dir.mkdir(exist_ok=True)
    return logs_dir


def get_log_file_path() -> Path:
    """Get the log file path based on environment."""
    logs_dir = ensure_logs_directory()
    log_filename = f"weather_assistant_{config.environment}.log"
    return logs_dir / log_filename


def _structlog_processors(log_format: str) -> list:
    """Build the structlog processor chain for the configured log format."""
    if log_format == "json":
        return [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    # Timestamp, level and name come from CustomFormatter
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.format_exc_info,
        structlog.processors.KeyValueRenderer(key_order=["event"], drop_missing=True),
    ]


def setup_logging():
    """
    Configure logging for the application.

    structlog loggers are routed into the standard library root logger, which
    writes to stdout and, when enabled, to logs/weather_assistant_<env>.log.
    Text format: [yyyy-mm-dd hh:mm:ss] [log_type] [class_name]: {message}
    """
    level = getattr(logging, config.log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    if config.log_format == "json":
        formatter = logging.Formatter("%(message)s")
    else:
        formatter = CustomFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file_path = None
    if config.log_to_file:
        log_file_path = get_log_file_path()
        file_handler = logging.FileHandler(log_file_path, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    structlog.configure(
        processors=_structlog_processors(config.log_format),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger(__name__)
    logger.info(
        "Logging configured",
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=str(log_file_path) if log_file_path else None,
    )
