"""Configuration settings loaded from .env file."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings, loaded from .env file.

    Every story file lives under ``data_dir``; chapters, backups and
    metadata.json are laid out beneath it by the chapter store.
    """

    # Storage
    data_dir: Path = Path("./story-data")
    json_indent: int = 2

    # Story defaults
    default_story_title: str = "My Anime Story"

    # Logging
    log_dir: Path = Path("./story-data/logs")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "STORYKEEPER_",
    }

    @field_validator("json_indent")
    @classmethod
    def validate_json_indent(cls, v: int) -> int:
        if v < 0:
            raise ValueError("json_indent must be >= 0")
        return v

    @field_validator("data_dir", "log_dir")
    @classmethod
    def ensure_parent_dirs(cls, v: Path) -> Path:
        v.parent.mkdir(parents=True, exist_ok=True)
        return v


_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
