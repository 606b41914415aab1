"""
Logging configuration for Gradle Insight.

Diagnostics go to stderr through a rich handler so that stdout stays
reserved for reports and JSON. The console level follows the configured
verbosity; an optional log file always records everything down to DEBUG,
so a quiet CI run can still leave a full trace of launcher fallbacks and
dry-run restores behind.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .exceptions import InvalidConfigError

LOGGER_NAME = "gradle_insight"

_CONSOLE_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Install the stderr handler and, if requested, a file handler.

    Args:
        verbosity: "quiet" (errors only), "normal" (warnings) or "verbose" (debug)
        log_file: Path of a file to append full DEBUG logs to

    Returns:
        The gradle_insight package logger

    Raises:
        InvalidConfigError: If the log file cannot be opened
    """
    console_level = _CONSOLE_LEVELS.get(verbosity, logging.WARNING)
    verbose = verbosity == "verbose"

    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=verbose,
        show_path=verbose,
    )
    console_handler.setLevel(console_level)
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as e:
            raise InvalidConfigError("log_file", log_file, str(e))
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    package_level = logging.DEBUG if log_file else console_level
    logging.basicConfig(
        level=package_level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(package_level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'gradle_insight.engine')
              If None, returns the root gradle_insight logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(LOGGER_NAME)

    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"

    return logging.getLogger(name)
