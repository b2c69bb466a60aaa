"""Save-time versioning: decide whether a save records a snapshot of the prior state."""

import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from config.exceptions import VersionConflictError
from models.chapter import Chapter, ChapterVersion, iso_timestamp
from models.enums import VersionLabel
from models.storage import ChapterStore
from versioning.classifier import classify, has_content_changed
from versioning.differ import diff

logger = logging.getLogger(__name__)


def new_version_id(existing_ids: Iterable[str], now: datetime) -> str:
    """Return ``v-<epoch ms>`` for ``now``, bumped past any id already taken."""
    taken = set(existing_ids)
    millis = int(now.timestamp() * 1000)
    while f"v-{millis}" in taken:
        millis += 1
    return f"v-{millis}"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class VersionStore:
    """Saves chapters through a ChapterStore, maintaining their version history.

    History is append-only: every recorded version captures the state that
    existed *before* the edit being saved, and earlier entries are never
    rewritten.
    """

    def __init__(self, store: ChapterStore, clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.clock = clock or _utc_now

    def _check_expected(self, chapter_id: str, existing: Optional[Chapter],
                        expected_versions: Optional[int]):
        if expected_versions is None:
            return
        actual = len(existing.versions) if existing else 0
        if actual != expected_versions:
            raise VersionConflictError(chapter_id, expected_versions, actual)

    def save(
        self,
        chapter: Chapter,
        create_version: bool,
        version_note: Optional[str] = None,
        expected_versions: Optional[int] = None,
    ) -> Chapter:
        """Persist ``chapter``, appending a snapshot of the stored state when asked.

        Args:
            chapter: Incoming chapter state. Its ``versions`` are replaced by the
                persisted history whenever a stored chapter exists.
            create_version: Record the stored (pre-edit) state as a new version
                if the title or content actually changed.
            version_note: Optional user note; when given, the version is
                labelled "Manual save" instead of the classified change kind.
            expected_versions: Optional number of versions the caller last saw.
                A mismatch raises VersionConflictError before anything is written.

        Returns:
            The saved chapter.
        """
        existing = self.store.load_chapter(chapter.id)
        self._check_expected(chapter.id, existing, expected_versions)

        if existing is None:
            chapter.versions = list(chapter.versions or [])
            logger.debug("Chapter %s is new; no version recorded", chapter.id)
        elif create_version and has_content_changed(existing, chapter):
            version = self._build_version(existing, chapter, version_note)
            chapter.versions = list(existing.versions) + [version]
            logger.info(
                "Chapter %s: recorded version %s (%s)", chapter.id, version.id, version.label
            )
        else:
            if create_version:
                logger.debug("Chapter %s unchanged; version skipped", chapter.id)
            chapter.versions = list(existing.versions)

        self.store.persist_chapter(chapter)
        self.store.recompute_aggregate_stats()
        return chapter

    def _build_version(self, existing: Chapter, incoming: Chapter,
                       version_note: Optional[str]) -> ChapterVersion:
        label, changed_fields = classify(existing, incoming)
        note = version_note or None
        return ChapterVersion(
            id=new_version_id((v.id for v in existing.versions), self.clock()),
            content=existing.content,
            title=existing.title,
            word_count=existing.word_count,
            timestamp=existing.updated_at,
            note=note,
            label=VersionLabel.MANUAL_SAVE.value if note else label,
            changed_fields=changed_fields,
            content_diff=diff(existing.content, incoming.content),
        )

    def snapshot(
        self,
        chapter_id: str,
        note: Optional[str] = None,
        label: Optional[str] = None,
    ) -> Optional[ChapterVersion]:
        """Record the chapter's current stored state as a version without editing it."""
        chapter = self.store.load_chapter(chapter_id)
        if chapter is None:
            return None

        now = self.clock()
        version = ChapterVersion(
            id=new_version_id((v.id for v in chapter.versions), now),
            content=chapter.content,
            title=chapter.title,
            word_count=chapter.word_count,
            timestamp=iso_timestamp(now),
            note=note or None,
            label=label or VersionLabel.MANUAL_SAVE.value,
            changed_fields=[],
        )
        chapter.versions.append(version)
        self.store.persist_chapter(chapter)
        logger.info("Chapter %s: snapshot %s recorded", chapter_id, version.id)
        return version

    def list_versions(self, chapter_id: str) -> Optional[list[ChapterVersion]]:
        """Stored versions oldest first, or None if the chapter does not exist."""
        chapter = self.store.load_chapter(chapter_id)
        if chapter is None:
            return None
        return list(chapter.versions)

    def get_version(self, chapter_id: str, version_id: str) -> Optional[ChapterVersion]:
        chapter = self.store.load_chapter(chapter_id)
        if chapter is None:
            return None
        return find_version(chapter, version_id)


def find_version(chapter: Chapter, version_id: str) -> Optional[ChapterVersion]:
    for version in chapter.versions:
        if version.id == version_id:
            return version
    return None
