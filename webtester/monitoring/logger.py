"""Centralized logging configuration using Loguru."""

import sys
from typing import Any

from loguru import logger

from webtester.core.config import Settings, get_settings


def setup_logging(settings: Settings | None = None) -> None:
    """Configure Loguru logging for the harness.

    Args:
        settings: Settings to read levels and paths from (cached settings if None)
    """
    settings = settings or get_settings()

    # Remove default handler
    logger.remove()

    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    file_format = (
        "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
        "{level: <8} | "
        "{name}:{function}:{line} | "
        "{message} | "
        "{extra}"
    )

    logger.add(
        sys.stderr,
        format=console_format,
        level=settings.log_level,
        colorize=True,
        backtrace=True,
        diagnose=settings.debug,
    )

    if settings.log_to_file:
        logs_dir = settings.logs_dir
        logs_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            logs_dir / "webtester_{time:YYYY-MM-DD}.log",
            format=file_format,
            level="DEBUG",
            rotation="00:00",  # Rotate at midnight
            retention="7 days",
            backtrace=True,
            diagnose=True,
        )

    logger.debug(f"Logging initialized | level={settings.log_level}")


def get_logger(name: str) -> Any:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    return logger.bind(name=name)
