"""Unified Rich theme and reusable UI helper functions for the CLI."""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.theme import Theme

from models.chapter import Chapter, ChapterVersion
from models.enums import ChapterStatus, VersionLabel
from models.metadata import StoryMetadata

STORY_THEME = Theme({
    "app.title": "bold",
    "success": "green",
    "warning": "yellow",
    "error": "red",
    "info": "blue",
    "muted": "dim",
    "accent": "cyan",
    "stat.label": "dim",
    "stat.value": "bold",
    "chapter.num": "blue",
    "version.id": "cyan",
    "diff.added": "green",
    "diff.removed": "red",
})

_LABEL_STYLES = {
    VersionLabel.MAJOR_EDIT.value: "red",
    VersionLabel.MODERATE_EDIT.value: "yellow",
    VersionLabel.MINOR_EDIT.value: "green",
    VersionLabel.BEFORE_RESTORE.value: "magenta",
    VersionLabel.MANUAL_SAVE.value: "cyan",
}

_STATUS_STYLES = {
    ChapterStatus.DRAFT: "yellow",
    ChapterStatus.IN_PROGRESS: "blue",
    ChapterStatus.COMPLETED: "green",
}


def get_console() -> Console:
    """Return a Console instance with the story theme applied."""
    return Console(theme=STORY_THEME)


def app_header(title: str = "storykeeper") -> Rule:
    """Return a Rule element for the application header banner."""
    return Rule(title=f"[bold]{title}[/]", style="dim")


def command_panel(title: str, fields: dict[str, str]) -> Panel:
    """Return a Panel displaying command parameters.

    Args:
        title: Panel title (e.g. "Save chapter").
        fields: Ordered dict of label -> value pairs.
    """
    lines = []
    for label, value in fields.items():
        lines.append(f"  [stat.label]{label}:[/] [stat.value]{value}[/]")
    body = "\n".join(lines)
    return Panel(body, title=f"[bold]{title}[/]", box=box.ROUNDED, border_style="dim", padding=(0, 2))


def success_panel(title: str, body: str) -> Panel:
    """Return a green-bordered Panel for success results."""
    return Panel(body, title=f"[success]{title}[/]", box=box.ROUNDED, border_style="green", padding=(0, 2))


def _diff_text(version: ChapterVersion) -> str:
    if version.content_diff is None:
        return "-"
    return (
        f"[diff.added]+{version.content_diff.added}[/] "
        f"[diff.removed]-{version.content_diff.removed}[/]"
    )


def version_table(chapter: Chapter) -> Table:
    """Build a table of a chapter's versions, latest first."""
    table = Table(title=f"History: {chapter.title or chapter.id}", box=box.ROUNDED, border_style="dim")
    table.add_column("#", style="muted", justify="right")
    table.add_column("Version", style="version.id")
    table.add_column("Label")
    table.add_column("Title")
    table.add_column("Words", justify="right")
    table.add_column("Diff", justify="right")
    table.add_column("Timestamp", style="muted")
    table.add_column("Note")

    # Storage order is chronological; position is the only reliable ordering
    for position, version in reversed(list(enumerate(chapter.versions, start=1))):
        style = _LABEL_STYLES.get(version.label, "white")
        table.add_row(
            str(position),
            version.id,
            f"[{style}]{version.label}[/]",
            version.title or "-",
            str(version.word_count),
            _diff_text(version),
            version.timestamp or "-",
            version.note or "",
        )
    return table


def chapter_table(chapters: list[Chapter]) -> Table:
    """Build a table listing chapters in episode order."""
    table = Table(title="Chapters", box=box.ROUNDED, border_style="dim")
    table.add_column("Ep.", style="chapter.num", justify="right")
    table.add_column("ID", style="muted")
    table.add_column("Title", style="bold")
    table.add_column("Words", justify="right")
    table.add_column("Status")
    table.add_column("Versions", justify="right")

    for ch in chapters:
        style = _STATUS_STYLES.get(ch.status, "white")
        table.add_row(
            str(ch.episode_number),
            ch.id,
            ch.title or "-",
            f"{ch.word_count:,}",
            f"[{style}]{ch.status.value}[/]",
            str(len(ch.versions)),
        )
    return table


def metadata_panel(metadata: StoryMetadata) -> Panel:
    """Return a Panel with story totals."""
    genre = ", ".join(metadata.genre) if metadata.genre else "-"
    body = (
        f"  [stat.label]Chapters:[/] [stat.value]{metadata.total_chapters}[/]  "
        f"[muted]|[/]  [stat.label]Words:[/] [stat.value]{metadata.total_word_count:,}[/]\n"
        f"  [stat.label]Genre:[/] {genre}  "
        f"[muted]|[/]  [stat.label]Updated:[/] {metadata.updated_at or '-'}"
    )
    return Panel(body, title=f"[bold]{metadata.title or 'Untitled'}[/]", box=box.ROUNDED,
                 border_style="dim", padding=(0, 2))


def comparison_panel(comparison) -> Panel:
    """Return a Panel describing a VersionComparison."""
    version = comparison.version
    body = (
        f"  [stat.label]Similarity:[/] [stat.value]{comparison.similarity}%[/]\n"
        f"  [stat.label]Words:[/] {comparison.version_word_count} -> "
        f"[stat.value]{comparison.live_word_count}[/]  "
        f"([diff.added]+{comparison.content_diff.added}[/] "
        f"[diff.removed]-{comparison.content_diff.removed}[/])\n"
        f"  [stat.label]Label:[/] {version.label}  [muted]|[/]  "
        f"[stat.label]Captured:[/] {version.timestamp or '-'}"
    )
    return Panel(body, title=f"[bold]{version.id}[/] [muted]vs live[/]", box=box.ROUNDED,
                 border_style="dim", padding=(0, 2))
