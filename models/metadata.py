"""Story-wide metadata model."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class StoryMetadata:
    """Cached story totals plus descriptive fields from metadata.json."""
    title: str = ""
    author: str = ""
    genre: list[str] = field(default_factory=list)
    synopsis: str = ""
    total_chapters: int = 0
    total_word_count: int = 0
    created_at: str = ""
    updated_at: str = ""
    writing_goal: Optional[int] = None
    target_word_count: Optional[int] = None
    language: Optional[str] = None
    tags: Optional[list[str]] = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "title": self.title,
            "author": self.author,
            "genre": list(self.genre),
            "synopsis": self.synopsis,
            "totalChapters": self.total_chapters,
            "totalWordCount": self.total_word_count,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        optional = {
            "writingGoal": self.writing_goal,
            "targetWordCount": self.target_word_count,
            "language": self.language,
            "tags": self.tags,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "StoryMetadata":
        return cls(
            title=data.get("title", ""),
            author=data.get("author", ""),
            genre=list(data.get("genre") or []),
            synopsis=data.get("synopsis", ""),
            total_chapters=int(data.get("totalChapters", 0)),
            total_word_count=int(data.get("totalWordCount", 0)),
            created_at=data.get("createdAt", ""),
            updated_at=data.get("updatedAt", ""),
            writing_goal=data.get("writingGoal"),
            target_word_count=data.get("targetWordCount"),
            language=data.get("language"),
            tags=data.get("tags"),
        )
