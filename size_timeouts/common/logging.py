"""Centralized logging configuration for size_timeouts.

Loguru is the logging facade for the whole package. Modules log through
``from loguru import logger``; nothing is printed unless a handler is
configured, either by the host application or by ``configure_logging``
(which the pytest plugin calls for ``--size-timeouts-debug``).

Usage:
    >>> from size_timeouts.common.logging import configure_logging
    >>> from loguru import logger
    >>> configure_logging(verbose=True)
    >>> logger.debug("Resolved {} to {}s", "tests.test_io.TestIO", 60)
"""

from __future__ import annotations

import sys

from loguru import logger


def configure_logging(verbose: bool = False) -> None:
    """Configure the global loguru logger.

    # <https://loguru.readthedocs.io/en/stable/>

    Args:
        verbose: If True, enable DEBUG level; if False, use INFO level.

    Note:
        This function is idempotent, it replaces any previously added handler.
        File:line format is used for terminal link clickability.
    """
    logger.remove()  # Remove default handler

    log_format = (
        "<level>{level: <7}</level>| "
        "<dim><cyan>{file}:{line}</cyan></dim> | "
        "<level>{message}</level>"
    )

    logger.add(
        sys.stderr,
        format=log_format,
        level="DEBUG" if verbose else "INFO",
        colorize=True,
        backtrace=True if verbose else False,
        diagnose=True if verbose else False,
    )

    logger.level("DEBUG", color="<dim><white>")
    logger.level("WARNING", color="<fg #ffff00><bold>")
