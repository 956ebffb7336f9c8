"""Logging configuration using loguru.

Library modules only emit debug traces through ``loguru.logger``. The package
disables its own records on import; nothing is printed until an application
(such as the extragrid CLI) calls :func:`configure_logging`.
"""

import sys

from loguru import logger

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
    "{exception}"
)


def configure_logging(log_level: str = "INFO", *, colorize: bool | None = None) -> None:
    """Configure loguru for command-line use.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        colorize: Force colors on or off. None lets loguru detect a terminal.
    """
    # Remove default handler
    logger.remove()
    logger.enable("extragrid")

    logger.add(
        sys.stderr,
        level=log_level,
        format=_FORMAT,
        colorize=colorize,
        backtrace=False,
        diagnose=False,
    )
