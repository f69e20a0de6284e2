"""
Logging configuration using Loguru.

Modules log through `get_logger(__name__)`, which binds the module name
into `extra`; both sinks render it in place of loguru's own `{name}`.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[module]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[module]}:{function}:{line} - {message}"
)


def setup_logging(
    level: str = "INFO",
    log_to_file: bool = False,
    log_dir: str = "logs",
    file_rotation: str = "10 MB",
    file_retention: str = "7 days",
    compression: str | None = "zip",
    serialize: bool = True,
) -> None:
    """Configure Loguru logger with a console sink and an optional rotating JSON file sink."""
    logger.remove()
    # Records from the bare `logger` (third-party code) still need a module
    logger.configure(extra={"module": "-"})

    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True, serialize=False)

    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path / "syllabus_graph_{time:YYYY-MM-DD}.log",
            level=level,
            format=FILE_FORMAT,
            rotation=file_rotation,
            retention=file_retention,
            compression=compression,
            serialize=serialize,
            enqueue=True,
        )


def get_logger(name: str):
    """Get a logger instance for a module."""
    return logger.bind(module=name)
