"""Configuration package — settings, logging, and exceptions."""

from config.exceptions import (
    StoryKeeperError,
    StorageError,
    BackupNotFoundError,
    VersioningError,
    VersionConflictError,
)
from config.logging_config import setup_logging
from config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "StoryKeeperError",
    "StorageError",
    "BackupNotFoundError",
    "VersioningError",
    "VersionConflictError",
]
