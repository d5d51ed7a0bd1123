"""Core utilities for ec2-ssh"""

from .base import BaseClient
from .cache import SnapshotCache, parse_ttl
from .config import PickerConfig, DEFAULT_REGIONS
from .display import BaseDisplay
from .spinner import BackgroundTask, wait_with_spinner
from .logging import setup_logging, get_logger, logger

__all__ = [
    "BaseClient",
    "SnapshotCache",
    "parse_ttl",
    "PickerConfig",
    "DEFAULT_REGIONS",
    "BaseDisplay",
    "BackgroundTask",
    "wait_with_spinner",
    "setup_logging",
    "get_logger",
    "logger",
]
