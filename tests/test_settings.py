"""Tests for Settings validation."""

import pytest
from pydantic import ValidationError


class TestSettingsDefaults:
    def test_paths_from_fixture(self, settings, tmp_path):
        assert settings.data_dir == tmp_path / "story-data"
        assert settings.log_dir == tmp_path / "logs"

    def test_store_layout_follows_data_dir(self, settings):
        from models.storage import ChapterStore
        store = ChapterStore.from_settings(settings)
        assert store.chapters_dir == settings.data_dir / "chapters"
        assert store.backups_dir == settings.data_dir / "backups"
        assert store.metadata_file == settings.data_dir / "metadata.json"
        assert store.default_title == settings.default_story_title
        assert store.indent == settings.json_indent

    def test_code_defaults(self, settings):
        assert settings.json_indent == 2
        assert settings.default_story_title == "My Anime Story"

    def test_env_override(self, tmp_path, monkeypatch):
        from config.settings import Settings
        monkeypatch.setenv("STORYKEEPER_DEFAULT_STORY_TITLE", "Night Train")
        s = Settings(_env_file=None, data_dir=tmp_path / "d", log_dir=tmp_path / "logs")
        assert s.default_story_title == "Night Train"

    def test_parent_dirs_created(self, tmp_path):
        from config.settings import Settings
        Settings(_env_file=None, data_dir=tmp_path / "nested" / "data", log_dir=tmp_path / "logs")
        assert (tmp_path / "nested").is_dir()


class TestSettingsValidation:
    def test_negative_indent_raises(self, tmp_path):
        from config.settings import Settings
        with pytest.raises(ValidationError, match="json_indent"):
            Settings(
                _env_file=None,
                data_dir=tmp_path / "story-data",
                log_dir=tmp_path / "logs",
                json_indent=-1,
            )


class TestGetSettings:
    def test_cached_instance(self, monkeypatch, tmp_path):
        from config import settings as settings_module
        monkeypatch.setattr(settings_module, "_settings_instance", None)
        monkeypatch.setenv("STORYKEEPER_DATA_DIR", str(tmp_path / "d"))
        monkeypatch.setenv("STORYKEEPER_LOG_DIR", str(tmp_path / "logs"))
        first = settings_module.get_settings()
        assert settings_module.get_settings() is first
