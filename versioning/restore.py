"""Restoring a chapter to one of its stored versions, and comparing against them."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from models.chapter import Chapter, ChapterVersion, ContentDiff, iso_timestamp
from models.enums import ChangedField, VersionLabel
from models.storage import ChapterStore
from tools.text_utils import calculate_similarity
from versioning.differ import diff
from versioning.version_store import find_version, new_version_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VersionComparison:
    """A stored version measured against the chapter's live state."""
    version: ChapterVersion
    similarity: int
    content_diff: ContentDiff
    live_word_count: int
    version_word_count: int


class RestoreEngine:
    """Makes an earlier version live again without losing the state it replaces."""

    def __init__(self, store: ChapterStore, clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def restore(self, chapter_id: str, version_id: str) -> Optional[Chapter]:
        """Roll ``chapter_id`` back to ``version_id``.

        The live state is first appended as a "Before restore" version, so the
        restore can itself be undone. Restoring the same version twice appends
        two snapshots.

        Returns:
            The restored chapter, or None if the chapter or version is unknown.
        """
        chapter = self.store.load_chapter(chapter_id)
        if chapter is None:
            return None

        target = find_version(chapter, version_id)
        if target is None:
            return None

        now = self.clock()
        before = ChapterVersion(
            id=new_version_id((v.id for v in chapter.versions), now),
            content=chapter.content,
            title=chapter.title,
            word_count=chapter.word_count,
            timestamp=chapter.updated_at,
            label=VersionLabel.BEFORE_RESTORE.value,
            changed_fields=[ChangedField.CONTENT.value, ChangedField.TITLE.value],
        )

        chapter.content = target.content
        chapter.title = target.title
        chapter.word_count = target.word_count
        chapter.updated_at = iso_timestamp(now)
        chapter.versions = list(chapter.versions) + [before]

        self.store.persist_chapter(chapter)
        self.store.recompute_aggregate_stats()
        logger.info(
            "Chapter %s restored to %s (pre-restore state kept as %s)",
            chapter_id, version_id, before.id,
        )
        return chapter

    def compare(self, chapter_id: str, version_id: str) -> Optional[VersionComparison]:
        """Compare a stored version with the live chapter, or None if either is unknown."""
        chapter = self.store.load_chapter(chapter_id)
        if chapter is None:
            return None
        version = find_version(chapter, version_id)
        if version is None:
            return None

        return VersionComparison(
            version=version,
            similarity=calculate_similarity(version.content, chapter.content),
            content_diff=diff(version.content, chapter.content),
            live_word_count=chapter.word_count,
            version_word_count=version.word_count,
        )
