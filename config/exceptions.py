"""Custom exception hierarchy for the story workspace."""

from typing import Optional


class StoryKeeperError(Exception):
    """Base exception for all storykeeper errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# ---- Storage Errors ----

class StorageError(StoryKeeperError):
    """Reading or writing a story file failed."""

    def __init__(self, message: str, path: Optional[str] = None):
        details = {"path": path} if path else {}
        super().__init__(message, details)
        self.path = path


class BackupNotFoundError(StorageError):
    """Requested backup directory does not exist."""

    def __init__(self, path: str):
        super().__init__("Backup not found", path)


# ---- Versioning Errors ----

class VersioningError(StoryKeeperError):
    """Base exception for chapter version history errors."""


class VersionConflictError(VersioningError):
    """Persisted history changed since the caller last read it."""

    def __init__(self, chapter_id: str, expected: int, actual: int):
        super().__init__(
            f"Chapter {chapter_id} history changed concurrently",
            {"chapter_id": chapter_id, "expected": expected, "actual": actual},
        )
        self.chapter_id = chapter_id
        self.expected = expected
        self.actual = actual
