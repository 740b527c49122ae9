"""Logging configuration for build-common."""

import logging
import sys

import click

LOGGER_NAME = "build_common"

TASK_PREFIX = "> Task "
"""Prefix of the progress line logged before each task runs"""


class BuildFormatter(logging.Formatter):
    """Formatter that colors problems and highlights task progress lines."""

    def format(self, record: logging.LogRecord) -> str:
        """Errors in bold red, warnings in yellow, task lines bold without a level."""
        message = super().format(record)
        if record.levelno >= logging.ERROR:
            return click.style(message, fg="red", bold=True)
        if record.levelno == logging.WARNING:
            return click.style(message, fg="yellow")
        if record.getMessage().startswith(TASK_PREFIX):
            return click.style(record.getMessage(), bold=True)
        return message


def resolve_level(verbose: bool = False, quiet: bool = False, log_level: str | None = None) -> int:
    """Pick the effective level: explicit > verbose > quiet > INFO."""
    if log_level:
        return getattr(logging, log_level.upper())
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def setup_logging(verbose: bool = False, quiet: bool = False, log_level: str | None = None) -> None:
    """Configure logging for build-common.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Show only WARNING and above
        log_level: Explicit log level (overrides verbose/quiet)
    """
    level = resolve_level(verbose=verbose, quiet=quiet, log_level=log_level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(BuildFormatter(fmt="%(levelname)s: %(message)s"))

    logger.addHandler(handler)
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance for the module
    """
    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"

    return logging.getLogger(name)
