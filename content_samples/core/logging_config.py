"""
Logging configuration.

Sets up the logging system with:
- A console handler with coloured level names when attached to a terminal
- Rotating file and error-file handlers when a log file is configured
- Quieter loggers for third-party libraries
"""

import logging
import logging.config
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from content_samples.core.config import Settings, get_settings


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colours the level name of console records.
    """

    # ANSI colour codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def format(self, record):
        formatted = super().format(record)

        # Only colour when writing to a terminal
        if hasattr(sys.stderr, "isatty") and sys.stderr.isatty():
            color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            reset = self.COLORS["RESET"]
            formatted = formatted.replace(record.levelname, f"{color}{record.levelname}{reset}", 1)

        return formatted


def get_logging_configuration(settings: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Build the ``dictConfig`` logging configuration.

    Returns:
        Dict: Logging configuration
    """
    settings = settings or get_settings()

    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": ("%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s"),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "colored": {
                "()": ColoredFormatter,
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            # stderr keeps log lines apart from the workflow's console output
            "console": {
                "class": "logging.StreamHandler",
                "level": settings.LOG_LEVEL,
                "formatter": "colored" if settings.DEBUG else "standard",
                "stream": "ext://sys.stderr",
            }
        },
        "root": {"level": settings.LOG_LEVEL, "handlers": ["console"]},
    }

    if settings.LOG_FILE_PATH:
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": settings.LOG_LEVEL,
            "formatter": "detailed",
            "filename": settings.LOG_FILE_PATH,
            "maxBytes": settings.LOG_MAX_SIZE_MB * 1024 * 1024,
            "backupCount": settings.LOG_BACKUP_COUNT,
            "encoding": "utf-8",
        }

        error_log_path = settings.LOG_FILE_PATH.replace(".log", "_errors.log")
        config["handlers"]["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "detailed",
            "filename": error_log_path,
            "maxBytes": settings.LOG_MAX_SIZE_MB * 1024 * 1024,
            "backupCount": settings.LOG_BACKUP_COUNT,
            "encoding": "utf-8",
        }

        config["root"]["handlers"].extend(["file", "error_file"])

    return config


def configure_specific_loggers(settings: Optional[Settings] = None) -> None:
    """
    Set levels for module-specific and third-party loggers.
    """
    settings = settings or get_settings()

    client_logger = logging.getLogger("content_samples.db")
    client_logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)

    external_loggers = [
        "aiohttp.access",
        "aiohttp.client",
        "asyncio",
    ]

    for logger_name in external_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure application-wide logging.
    """
    settings = settings or get_settings()

    if settings.LOG_FILE_PATH:
        Path(settings.LOG_FILE_PATH).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(get_logging_configuration(settings))
    logging.getLogger().setLevel(getattr(logging, settings.LOG_LEVEL))
    configure_specific_loggers(settings)

    logger = logging.getLogger(__name__)
    logger.debug(f"Logging configured - level: {settings.LOG_LEVEL}")
    if settings.LOG_FILE_PATH:
        logger.debug(f"Logs written to: {settings.LOG_FILE_PATH}")
