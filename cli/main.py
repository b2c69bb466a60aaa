"""CLI entry point — storykeeper chapter history tool.

Usage:
  storykeeper chapters                 list chapters
  storykeeper save ID -f draft.html    save new content (add --version to snapshot)
  storykeeper history ID               show version history
  storykeeper restore ID VERSION_ID    roll a chapter back
  storykeeper --help                   list all commands
"""

import dataclasses
import logging
import os
import sys
from pathlib import Path

# Ensure UTF-8 output on Windows to avoid encoding errors with Rich
if sys.platform == "win32":
    os.environ.setdefault("PYTHONIOENCODING", "utf-8")

import click
from rich.panel import Panel

from cli.theme import (
    get_console,
    app_header,
    command_panel,
    success_panel,
    version_table,
    chapter_table,
    metadata_panel,
    comparison_panel,
)
from config.exceptions import StoryKeeperError, VersionConflictError
from config.logging_config import setup_logging
from config.settings import Settings, get_settings
from models.chapter import Chapter, iso_timestamp
from models.storage import ChapterStore
from tools.text_utils import count_words, strip_html
from versioning.restore import RestoreEngine
from versioning.version_store import VersionStore

console = get_console()


def _load_settings(data_dir: str | None) -> Settings:
    if data_dir:
        root = Path(data_dir)
        return Settings(data_dir=root, log_dir=root / "logs")
    return get_settings()


def _init_logging(settings: Settings, verbose: bool):
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    setup_logging(level=level, log_dir=settings.log_dir, console_enabled=verbose)


def _store(ctx) -> ChapterStore:
    return ChapterStore.from_settings(ctx.obj["settings"])


def _fail(message: str):
    console.print(f"[error]{message}[/]")
    sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--data-dir", "-d", default=None, type=click.Path(file_okay=False),
              help="Story data directory (overrides STORYKEEPER_DATA_DIR)")
@click.pass_context
def cli(ctx, verbose, data_dir):
    """storykeeper — chapter version history for a story kept as JSON files.

    \b
    Typical flow:
      storykeeper save ch-1 -f draft.html --title "Arrival"
      storykeeper save ch-1 -f draft2.html --version --note "after beta read"
      storykeeper history ch-1
      storykeeper restore ch-1 v-1718000000000
    """
    settings = _load_settings(data_dir)
    _init_logging(settings, verbose)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


# ---------------------------------------------------------------------------
# save / edit commands
# ---------------------------------------------------------------------------

def _apply_edit(store: ChapterStore, chapter_id: str, content: str, title: str | None,
                episode: int | None) -> Chapter:
    """Build the incoming chapter state from the stored one plus the new text."""
    now = iso_timestamp()
    existing = store.load_chapter(chapter_id)
    if existing is None:
        chapter = Chapter(id=chapter_id, title=title or "", created_at=now)
    else:
        chapter = dataclasses.replace(existing)
        if title is not None:
            chapter.title = title
    if episode is not None:
        chapter.episode_number = episode
    chapter.content = content
    chapter.word_count = count_words(content)
    chapter.updated_at = now
    return chapter


def _save(ctx, chapter: Chapter, version: bool, note: str | None, expected: int | None):
    store = _store(ctx)
    versions = VersionStore(store)
    before = len(chapter.versions)
    try:
        is_new = store.load_chapter(chapter.id) is None
        saved = versions.save(chapter, create_version=version, version_note=note,
                              expected_versions=expected)
    except VersionConflictError as e:
        _fail(f"Save rejected: {e}")
    except StoryKeeperError as e:
        _fail(f"Save failed: {e}")

    recorded = len(saved.versions) > before
    body = (
        f"  [stat.label]Title:[/] [bold]{saved.title or '-'}[/]\n"
        f"  [stat.label]Words:[/] [stat.value]{saved.word_count:,}[/]  "
        f"[muted]|[/]  [stat.label]Versions:[/] [stat.value]{len(saved.versions)}[/]"
    )
    if recorded:
        latest = saved.versions[-1]
        body += f"\n  [stat.label]Recorded:[/] [version.id]{latest.id}[/] ({latest.label})"
    elif version and is_new:
        body += "\n  [muted]New chapter; nothing to version until its next save[/]"
    elif version:
        body += "\n  [muted]No title or content change; no version recorded[/]"
    console.print(success_panel(f"Saved {saved.id}", body))


@cli.command()
@click.argument("chapter_id")
@click.option("--content-file", "-f", required=True, type=click.File("r", encoding="utf-8"),
              help="File holding the new chapter content ('-' for stdin)")
@click.option("--title", "-t", default=None, help="New chapter title")
@click.option("--episode", "-e", default=None, type=int, help="Episode number")
@click.option("--version/--no-version", default=False, help="Record the previous state as a version")
@click.option("--note", "-m", default=None, help="Version note (labels the version 'Manual save')")
@click.option("--expected-versions", default=None, type=int,
              help="Reject the save if the stored history length differs")
@click.pass_context
def save(ctx, chapter_id, content_file, title, episode, version, note, expected_versions):
    """Save new content for a chapter.

    Example:
      storykeeper save ch-1 -f draft.html --version -m "tightened opening"
    """
    content = content_file.read()
    chapter = _apply_edit(_store(ctx), chapter_id, content, title, episode)
    _save(ctx, chapter, version, note, expected_versions)


@cli.command()
@click.argument("chapter_id")
@click.option("--version/--no-version", default=True, help="Record the previous state as a version")
@click.option("--note", "-m", default=None, help="Version note")
@click.pass_context
def edit(ctx, chapter_id, version, note):
    """Edit chapter content in the system editor and save it back.

    Example:
      storykeeper edit ch-1
    """
    store = _store(ctx)
    existing = store.load_chapter(chapter_id)
    if existing is None:
        _fail(f"Chapter {chapter_id} not found")

    edited = click.edit(existing.content or "", extension=".html")
    if edited is None:
        console.print("[warning]Edit cancelled (no changes or editor closed)[/]")
        return

    chapter = _apply_edit(store, chapter_id, edited.rstrip("\n"), None, None)
    _save(ctx, chapter, version, note, None)


# ---------------------------------------------------------------------------
# history commands
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("chapter_id")
@click.pass_context
def history(ctx, chapter_id):
    """Show a chapter's version history, latest first."""
    chapter = _store(ctx).load_chapter(chapter_id)
    if chapter is None:
        _fail(f"Chapter {chapter_id} not found")

    console.print(app_header())
    if not chapter.versions:
        console.print("[warning]No versions recorded yet[/]")
        return
    console.print(version_table(chapter))


@cli.command(name="show-version")
@click.argument("chapter_id")
@click.argument("version_id")
@click.option("--raw", is_flag=True, help="Print stored markup instead of plain text")
@click.pass_context
def show_version(ctx, chapter_id, version_id, raw):
    """Print the content stored in one version."""
    version = VersionStore(_store(ctx)).get_version(chapter_id, version_id)
    if version is None:
        _fail(f"Version {version_id} of chapter {chapter_id} not found")

    fields = {
        "Title": version.title or "-",
        "Label": version.label,
        "Words": str(version.word_count),
        "Timestamp": version.timestamp or "-",
    }
    if version.note:
        fields["Note"] = version.note
    if version.changed_fields:
        fields["Changed"] = ", ".join(version.changed_fields)
    console.print(command_panel(version.id, fields))
    text = version.content if raw else strip_html(version.content)
    console.print(Panel(text or "[muted](empty)[/]", border_style="dim", padding=(0, 2)))


@cli.command()
@click.argument("chapter_id")
@click.option("--note", "-m", default=None, help="Version note")
@click.pass_context
def snapshot(ctx, chapter_id, note):
    """Record the chapter's current state as a version without editing it."""
    version = VersionStore(_store(ctx)).snapshot(chapter_id, note=note)
    if version is None:
        _fail(f"Chapter {chapter_id} not found")
    console.print(f"[success]Snapshot {version.id} recorded ({version.label})[/]")


@cli.command()
@click.argument("chapter_id")
@click.argument("version_id")
@click.pass_context
def restore(ctx, chapter_id, version_id):
    """Make an earlier version live again (the current state is kept as a version)."""
    chapter = RestoreEngine(_store(ctx)).restore(chapter_id, version_id)
    if chapter is None:
        _fail(f"Cannot restore: chapter {chapter_id} or version {version_id} not found")

    saved_as = chapter.versions[-1].id
    console.print(success_panel(
        f"Restored {chapter_id}",
        f"  [stat.label]Now live:[/] [version.id]{version_id}[/] "
        f"([stat.value]{chapter.word_count:,}[/] words)\n"
        f"  [stat.label]Previous state saved as:[/] [version.id]{saved_as}[/]",
    ))


@cli.command()
@click.argument("chapter_id")
@click.argument("version_id")
@click.pass_context
def compare(ctx, chapter_id, version_id):
    """Compare a stored version with the live chapter."""
    comparison = RestoreEngine(_store(ctx)).compare(chapter_id, version_id)
    if comparison is None:
        _fail(f"Version {version_id} of chapter {chapter_id} not found")
    console.print(comparison_panel(comparison))


# ---------------------------------------------------------------------------
# chapter / story commands
# ---------------------------------------------------------------------------

@cli.command()
@click.pass_context
def chapters(ctx):
    """List chapters in episode order."""
    items = _store(ctx).list_chapters()
    console.print(app_header())
    if not items:
        console.print("[warning]No chapters yet. Use [info]storykeeper save[/] to add one.[/]")
        return
    console.print(chapter_table(items))


@cli.command()
@click.pass_context
def stats(ctx):
    """Recompute and show story totals."""
    metadata = _store(ctx).recompute_aggregate_stats()
    console.print(metadata_panel(metadata))


@cli.command()
@click.argument("chapter_id")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete(ctx, chapter_id, force):
    """Delete a chapter and its whole version history."""
    store = _store(ctx)
    chapter = store.load_chapter(chapter_id)
    if chapter is None:
        _fail(f"Chapter {chapter_id} not found")

    if not force:
        confirmed = click.confirm(
            f"Delete '{chapter.title or chapter_id}' and {len(chapter.versions)} versions?",
            default=False,
        )
        if not confirmed:
            console.print("[warning]Cancelled[/]")
            return

    store.delete_chapter(chapter_id)
    console.print(f"[success]Chapter {chapter_id} deleted[/]")


# ---------------------------------------------------------------------------
# backup commands
# ---------------------------------------------------------------------------

@cli.command()
@click.pass_context
def backup(ctx):
    """Copy chapters and metadata into a timestamped backup."""
    path = _store(ctx).create_backup()
    console.print(f"[success]Backup written to {path}[/]")


@cli.command()
@click.pass_context
def backups(ctx):
    """List backups, newest first."""
    items = _store(ctx).list_backups()
    if not items:
        console.print("[warning]No backups yet[/]")
        return
    for item in items:
        console.print(
            f"  [accent]{item['path'].name}[/]  [muted]{item['timestamp']}  {item['size']:,} bytes[/]"
        )


@cli.command(name="restore-backup")
@click.argument("backup_path", type=click.Path())
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
def restore_backup(ctx, backup_path, force):
    """Replace live chapters and metadata with a backup."""
    if not force and not click.confirm("Overwrite current story data?", default=False):
        console.print("[warning]Cancelled[/]")
        return
    try:
        _store(ctx).restore_backup(backup_path)
    except StoryKeeperError as e:
        _fail(str(e))
    console.print(f"[success]Restored story data from {backup_path}[/]")


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
