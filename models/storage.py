"""Flat JSON file storage for chapters, story metadata and backups."""

import json
import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, Optional

from config.exceptions import BackupNotFoundError, StorageError
from models.chapter import Chapter, iso_timestamp
from models.metadata import StoryMetadata

logger = logging.getLogger(__name__)

# Entries copied into every backup, relative to the data directory
_BACKUP_ENTRIES = ["chapters", "metadata.json"]


def compute_story_stats(chapters: Iterable[Chapter]) -> tuple[int, int]:
    """Return (total_chapters, total_word_count) for a set of chapters."""
    total_chapters = 0
    total_words = 0
    for chapter in chapters:
        total_chapters += 1
        total_words += chapter.word_count
    return total_chapters, total_words


class ChapterStore:
    """JSON file store rooted at a story data directory.

    Layout::

        <data_dir>/chapters/<id>.json
        <data_dir>/metadata.json
        <data_dir>/backups/backup-<timestamp>/
    """

    def __init__(
        self,
        data_dir: str | Path,
        default_title: str = "My Anime Story",
        indent: int = 2,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.data_dir = Path(data_dir)
        self.chapters_dir = self.data_dir / "chapters"
        self.backups_dir = self.data_dir / "backups"
        self.metadata_file = self.data_dir / "metadata.json"
        self.default_title = default_title
        self.indent = indent
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self._ensure_directories()

    @classmethod
    def from_settings(cls, settings) -> "ChapterStore":
        return cls(
            settings.data_dir,
            default_title=settings.default_story_title,
            indent=settings.json_indent,
        )

    def _ensure_directories(self):
        for directory in (self.data_dir, self.chapters_dir, self.backups_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def _chapter_path(self, chapter_id: str) -> Path:
        return self.chapters_dir / f"{chapter_id}.json"

    # ---- Raw JSON I/O ----

    def _read_json(self, path: Path) -> dict:
        try:
            with path.open(encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read {path.name}: {e}", str(path)) from e

    def _write_json(self, path: Path, data) -> None:
        try:
            text = json.dumps(data, indent=self.indent, ensure_ascii=False)
            path.write_text(text, encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to write {path.name}: {e}", str(path)) from e

    def _parse_chapter(self, path: Path) -> Chapter:
        data = self._read_json(path)
        try:
            return Chapter.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Malformed chapter record: {e}", str(path)) from e

    # ---- Chapter persistence ----

    def load_chapter(self, chapter_id: str) -> Optional[Chapter]:
        path = self._chapter_path(chapter_id)
        if not path.exists():
            return None
        return self._parse_chapter(path)

    def persist_chapter(self, chapter: Chapter) -> None:
        """Write the full chapter record, replacing any previous file for its id."""
        self._ensure_directories()
        self._write_json(self._chapter_path(chapter.id), chapter.to_dict())
        logger.debug("Chapter %s written (%d versions)", chapter.id, len(chapter.versions))

    def list_chapters(self) -> list[Chapter]:
        """Return every chapter ordered by episode number."""
        chapters = [self._parse_chapter(p) for p in sorted(self.chapters_dir.glob("*.json"))]
        return sorted(chapters, key=lambda ch: ch.episode_number)

    def delete_chapter(self, chapter_id: str) -> bool:
        """Delete a chapter together with its entire version history."""
        path = self._chapter_path(chapter_id)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(f"Failed to delete chapter {chapter_id}: {e}", str(path)) from e
        logger.info("Chapter %s and its history deleted", chapter_id)
        self.recompute_aggregate_stats()
        return True

    # ---- Story metadata ----

    def get_metadata(self) -> StoryMetadata:
        if not self.metadata_file.exists():
            now = iso_timestamp(self.clock())
            metadata = StoryMetadata(title=self.default_title, created_at=now, updated_at=now)
            self.save_metadata(metadata)
            return metadata
        return StoryMetadata.from_dict(self._read_json(self.metadata_file))

    def save_metadata(self, metadata: StoryMetadata) -> None:
        self._ensure_directories()
        self._write_json(self.metadata_file, metadata.to_dict())

    def recompute_aggregate_stats(self) -> StoryMetadata:
        """Rescan all chapters and refresh the cached totals in metadata.json."""
        metadata = self.get_metadata()
        total_chapters, total_words = compute_story_stats(self.list_chapters())
        metadata.total_chapters = total_chapters
        metadata.total_word_count = total_words
        metadata.updated_at = iso_timestamp(self.clock())
        self.save_metadata(metadata)
        logger.debug("Story stats: %d chapters, %d words", total_chapters, total_words)
        return metadata

    # ---- Backups ----

    def create_backup(self) -> Path:
        """Copy chapters and metadata into a new timestamped backup directory."""
        self._ensure_directories()
        stamp = iso_timestamp(self.clock()).replace(":", "-").replace(".", "-")
        backup_path = self.backups_dir / f"backup-{stamp}"
        suffix = 1
        while backup_path.exists():
            backup_path = self.backups_dir / f"backup-{stamp}-{suffix}"
            suffix += 1
        try:
            backup_path.mkdir(parents=True, exist_ok=False)
            for name in _BACKUP_ENTRIES:
                src = self.data_dir / name
                if not src.exists():
                    continue
                if src.is_dir():
                    shutil.copytree(src, backup_path / name)
                else:
                    shutil.copy2(src, backup_path / name)
        except OSError as e:
            raise StorageError(f"Backup failed: {e}", str(backup_path)) from e
        logger.info("Story data backed up to %s", backup_path)
        return backup_path

    def list_backups(self) -> list[dict]:
        """Return backups newest first, each as {'path', 'timestamp', 'size'}."""
        backups = []
        for entry in self.backups_dir.iterdir():
            if not entry.is_dir():
                continue
            mtime = datetime.fromtimestamp(entry.stat().st_mtime, tz=timezone.utc)
            backups.append({
                "path": entry,
                "timestamp": iso_timestamp(mtime),
                "size": _directory_size(entry),
            })
        return sorted(backups, key=lambda b: (b["timestamp"], b["path"].name), reverse=True)

    def restore_backup(self, backup_path: str | Path) -> None:
        """Replace live chapters and metadata with the contents of a backup."""
        backup_path = Path(backup_path)
        if not backup_path.is_dir() or not any(
            (backup_path / name).exists() for name in _BACKUP_ENTRIES
        ):
            raise BackupNotFoundError(str(backup_path))
        try:
            for name in _BACKUP_ENTRIES:
                src = backup_path / name
                dest = self.data_dir / name
                if not src.exists():
                    continue
                if src.is_dir():
                    if dest.exists():
                        shutil.rmtree(dest)
                    shutil.copytree(src, dest)
                else:
                    shutil.copy2(src, dest)
        except OSError as e:
            raise StorageError(f"Restore from backup failed: {e}", str(backup_path)) from e
        logger.info("Story data restored from %s", backup_path)


def _directory_size(path: Path) -> int:
    return sum(p.stat().st_size for p in path.rglob("*") if p.is_file())
