"""Logging utilities with rich output for the snippet CLIs.

Every module gets its logger from here so that export and upload runs share
one console and one format.

Usage:
    from common.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Exporting snippets for 2024-01-01...")
    logger.warning("Skip (missing date or email): <page id>")
    logger.error("Upload failed", exc_info=True)
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

# Diagnostics (warnings, errors, tallies) go to stderr so stdout stays clean
console = Console(stderr=True)

APP_LOGGER_PREFIXES = ("common", "source", "export", "upload")


def _rich_handler(show_time: bool = False, show_path: bool = False) -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=show_time,
        show_path=show_path,
        rich_tracebacks=True,
        markup=True,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def get_logger(
    name: str,
    level: str | None = None,
    show_time: bool = False,
    show_path: bool = False,
) -> logging.Logger:
    """Get a configured logger with rich output.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If None, uses environment variable LOG_LEVEL or defaults to INFO.
        show_time: Show timestamp in log output
        show_path: Show file path in log output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")

    logger.setLevel(level.upper())
    logger.addHandler(_rich_handler(show_time=show_time, show_path=show_path))

    # Keep propagation on so pytest's caplog sees records
    logger.propagate = True

    return logger


def setup_logging(level: str = "INFO", log_file: str | None = None, debug: bool = False) -> None:
    """Configure logging once at a CLI entry point.

    Module loggers from get_logger() already print through rich; the root
    logger only gets an optional file handler so nothing is printed twice.

    Args:
        level: Default logging level for all modules (LOG_LEVEL overrides it)
        log_file: Optional file path to also log to a file
        debug: Force DEBUG level for every snippet module logger
    """
    level = "DEBUG" if debug else os.getenv("LOG_LEVEL", level).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    # Module loggers were created at import time with their own level
    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and name.startswith(APP_LOGGER_PREFIXES):
            logger.setLevel(level)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)


def progress(message: str) -> None:
    """Print a progress line without the logger prefix."""
    console.print(message)


def success(message: str) -> None:
    """Print a success line with a green checkmark."""
    console.print(f"[green]✓[/green] {message}")


def warning(message: str) -> None:
    """Print a warning line with a yellow warning icon."""
    console.print(f"[yellow]⚠[/yellow] {message}")


def error(message: str) -> None:
    """Print an error line with a red X icon."""
    console.print(f"[red]✗[/red] {message}")
