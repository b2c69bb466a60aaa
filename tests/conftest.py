"""Shared pytest fixtures for the storykeeper test suite."""

from datetime import datetime, timedelta, timezone

import pytest


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


# ---------------------------------------------------------------------------
# Clock / store fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def clock():
    """Return a FakeClock fixed at 2024-05-01 12:00:00 UTC."""
    return FakeClock(datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "story-data"


@pytest.fixture
def store(data_dir, clock):
    """Return a ChapterStore backed by a temp directory."""
    from models.storage import ChapterStore
    return ChapterStore(data_dir, clock=clock)


@pytest.fixture
def version_store(store, clock):
    from versioning.version_store import VersionStore
    return VersionStore(store, clock=clock)


@pytest.fixture
def restore_engine(store, clock):
    from versioning.restore import RestoreEngine
    return RestoreEngine(store, clock=clock)


# ---------------------------------------------------------------------------
# Settings fixture
# ---------------------------------------------------------------------------

@pytest.fixture
def settings(tmp_path):
    """Return a Settings instance with all paths pointing to tmp_path."""
    from config.settings import Settings
    return Settings(
        _env_file=None,
        data_dir=tmp_path / "story-data",
        log_dir=tmp_path / "logs",
    )


# ---------------------------------------------------------------------------
# Sample data fixtures
# ---------------------------------------------------------------------------

def make_chapter(chapter_id="ch-1", title="The Gate", content="<p>one two three</p>",
                 word_count=None, updated_at="2024-04-30T09:00:00.000Z", **kwargs):
    from models.chapter import Chapter
    from tools.text_utils import count_words
    return Chapter(
        id=chapter_id,
        title=title,
        content=content,
        word_count=count_words(content) if word_count is None else word_count,
        created_at="2024-04-01T08:00:00.000Z",
        updated_at=updated_at,
        **kwargs,
    )


@pytest.fixture
def sample_chapter(store):
    """Persist and return a chapter with content 'one two three' and no history."""
    chapter = make_chapter(episode_number=1)
    store.persist_chapter(chapter)
    return chapter


@pytest.fixture
def chapter_factory():
    """Return the make_chapter builder for tests that need unsaved chapters."""
    return make_chapter
