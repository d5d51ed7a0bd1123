"""Logging configuration for ec2-ssh."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("ec2_ssh")


def setup_logging(
    debug: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """Configure logging for the picker.

    Warnings (failed regions, unwritable cache) go to stderr through rich so
    they stay out of the way of the prompts on stdout. ``debug`` lowers the
    console threshold to DEBUG; ``log_file`` adds a plain file handler that
    always records DEBUG.

    Returns:
        The configured ``ec2_ssh`` logger
    """
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.handlers.clear()

    console = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=debug,
        markup=False,
        rich_tracebacks=debug,
    )
    console.setLevel(logging.DEBUG if debug else logging.WARNING)
    console.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger, e.g. ``get_logger("inventory")`` -> ``ec2_ssh.inventory``"""
    return logger.getChild(name)
