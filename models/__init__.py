"""Models package — chapter records, story metadata, and JSON storage."""

from models.chapter import Chapter, ChapterVersion, ContentDiff, iso_timestamp
from models.metadata import StoryMetadata
from models.storage import ChapterStore, compute_story_stats
from models.enums import ChapterStatus, ChangedField, VersionLabel

__all__ = [
    "Chapter",
    "ChapterVersion",
    "ContentDiff",
    "iso_timestamp",
    "StoryMetadata",
    "ChapterStore",
    "compute_story_stats",
    "ChapterStatus",
    "ChangedField",
    "VersionLabel",
]
