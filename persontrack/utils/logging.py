"""
Logging setup for PersonTrack processes.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import sys

from loguru import logger

from persontrack.config.settings import ClientSettings

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]} | "
    "{name}:{function}:{line} | {message}"
)


def configure_logging(settings: ClientSettings, name: str = "persontrack") -> "logger":
    """
    Install the process-wide loguru sinks described by ``settings``.

    Replaces any sinks already installed, so call it once at startup.
    Every record carries ``name`` in its extras, including records from
    modules that log through the bare ``loguru.logger``.

    Args:
        settings: Client settings providing the level and optional log file
        name: Process name shown on every line

    Returns:
        Logger bound to ``name``
    """
    logger.remove()
    logger.configure(extra={"name": name})

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=settings.log_level,
        colorize=True,
    )

    if settings.log_file is not None:
        logger.add(
            settings.log_file,
            format=FILE_FORMAT,
            level=settings.log_level,
            rotation=settings.log_rotation,
            retention=settings.log_retention,
            compression="zip",
        )

    return logger.bind(name=name)
