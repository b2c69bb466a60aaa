"""Chapter and chapter version data models.

Records are stored on disk as camelCase JSON; ``to_dict``/``from_dict`` map
between that layout and the snake_case dataclasses used in code.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from models.enums import ChapterStatus


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a datetime as UTC ISO-8601 with millisecond precision and a Z suffix."""
    moment = moment or datetime.now(timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class ContentDiff:
    """Approximate word delta between two contents."""
    added: int = 0
    removed: int = 0

    def to_dict(self) -> dict:
        return {"added": self.added, "removed": self.removed}

    @classmethod
    def from_dict(cls, data: dict) -> "ContentDiff":
        return cls(added=int(data.get("added", 0)), removed=int(data.get("removed", 0)))


@dataclass(frozen=True)
class ChapterVersion:
    """Immutable snapshot of a chapter's title, content and word count."""
    id: str
    content: str
    title: str
    word_count: int
    timestamp: str
    label: str
    note: Optional[str] = None
    changed_fields: Optional[list[str]] = None
    content_diff: Optional[ContentDiff] = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "id": self.id,
            "content": self.content,
            "title": self.title,
            "wordCount": self.word_count,
            "timestamp": self.timestamp,
        }
        if self.note is not None:
            data["note"] = self.note
        data["label"] = self.label
        if self.changed_fields is not None:
            data["changedFields"] = list(self.changed_fields)
        if self.content_diff is not None:
            data["contentDiff"] = self.content_diff.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ChapterVersion":
        diff = data.get("contentDiff")
        changed = data.get("changedFields")
        return cls(
            id=data["id"],
            content=data.get("content") or "",
            title=data.get("title") or "",
            word_count=int(data.get("wordCount", 0)),
            timestamp=data.get("timestamp", ""),
            label=data.get("label", "Manual save"),
            note=data.get("note"),
            changed_fields=list(changed) if changed is not None else None,
            content_diff=ContentDiff.from_dict(diff) if diff is not None else None,
        )


_CHAPTER_KEYS = {
    "id", "title", "episodeNumber", "arc", "content", "wordCount",
    "createdAt", "updatedAt", "status", "notes", "tags", "versions",
}


@dataclass
class Chapter:
    """Represents a single chapter and its version history (oldest first)."""
    id: str
    title: str = ""
    content: str = ""
    word_count: int = 0
    episode_number: int = 0
    arc: str = ""
    status: ChapterStatus = ChapterStatus.DRAFT
    notes: Optional[str] = None
    tags: Optional[list[str]] = None
    created_at: str = ""
    updated_at: str = ""
    versions: list[ChapterVersion] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "episodeNumber": self.episode_number,
            "arc": self.arc,
            "content": self.content,
            "wordCount": self.word_count,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "status": self.status.value,
        }
        if self.notes is not None:
            data["notes"] = self.notes
        if self.tags is not None:
            data["tags"] = list(self.tags)
        data.update(self.extra)
        data["versions"] = [v.to_dict() for v in self.versions]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Chapter":
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            content=data.get("content") or "",
            word_count=int(data.get("wordCount", 0)),
            episode_number=int(data.get("episodeNumber", 0)),
            arc=data.get("arc", ""),
            status=ChapterStatus(data.get("status", ChapterStatus.DRAFT.value)),
            notes=data.get("notes"),
            tags=data.get("tags"),
            created_at=data.get("createdAt", ""),
            updated_at=data.get("updatedAt", ""),
            versions=[ChapterVersion.from_dict(v) for v in data.get("versions") or []],
            extra={k: v for k, v in data.items() if k not in _CHAPTER_KEYS},
        )
