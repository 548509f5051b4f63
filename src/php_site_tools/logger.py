"""Loguru logger configuration."""

import sys

from loguru import logger


def init_logger(verbose: bool = False) -> None:
    """Route log records to stderr.

    Console status lines are printed through rich; loguru only carries
    diagnostics (commands run, exit codes), so the default level is WARNING.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="<green>{time:HH:mm:ss}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
               "<level>{message}</level>",
        colorize=True,
    )
