"""Tests for the custom exception hierarchy."""

import pytest
from config.exceptions import (
    StoryKeeperError,
    StorageError,
    BackupNotFoundError,
    VersioningError,
    VersionConflictError,
)


class TestExceptionHierarchy:
    def test_all_inherit_from_story_keeper_error(self):
        leaf_classes = [
            StorageError, BackupNotFoundError,
            VersioningError, VersionConflictError,
        ]
        for cls in leaf_classes:
            assert issubclass(cls, StoryKeeperError), f"{cls.__name__} must inherit StoryKeeperError"

    def test_storage_subclasses(self):
        assert issubclass(BackupNotFoundError, StorageError)

    def test_versioning_subclasses(self):
        assert issubclass(VersionConflictError, VersioningError)


class TestExceptionCreation:
    def test_basic_message(self):
        err = VersioningError("history broken")
        assert err.message == "history broken"
        assert err.details == {}

    def test_storage_error_carries_path(self):
        err = StorageError("Failed to read ch-1.json", "/data/chapters/ch-1.json")
        assert err.path == "/data/chapters/ch-1.json"
        assert "path=/data/chapters/ch-1.json" in str(err)

    def test_storage_error_without_path(self):
        err = StorageError("disk full")
        assert str(err) == "disk full"

    def test_conflict_details(self):
        err = VersionConflictError("ch-1", expected=2, actual=3)
        assert err.details == {"chapter_id": "ch-1", "expected": 2, "actual": 3}
        assert "ch-1" in str(err)

    def test_backup_not_found_message(self):
        err = BackupNotFoundError("/backups/backup-x")
        assert err.message == "Backup not found"
        assert err.path == "/backups/backup-x"

    def test_catchable_as_base(self):
        with pytest.raises(StoryKeeperError):
            raise VersionConflictError("ch-1", 0, 1)
