"""Enumerations for chapter and version tracking."""

from enum import Enum


class ChapterStatus(str, Enum):
    DRAFT = "draft"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class ChangedField(str, Enum):
    TITLE = "title"
    CONTENT = "content"


class VersionLabel(str, Enum):
    """Labels attached to version snapshots."""
    TITLE_AND_CONTENT = "Title and content changed"
    TITLE = "Title changed"
    MAJOR_EDIT = "Major edit"
    MODERATE_EDIT = "Moderate edit"
    MINOR_EDIT = "Minor edit"
    MANUAL_SAVE = "Manual save"
    BEFORE_RESTORE = "Before restore"
