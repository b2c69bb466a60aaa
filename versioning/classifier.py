"""Change classification between two chapter states."""

from typing import NamedTuple

from models.chapter import Chapter
from models.enums import ChangedField, VersionLabel

MAJOR_EDIT_PERCENT = 20
MODERATE_EDIT_PERCENT = 5


class Classification(NamedTuple):
    label: str
    changed_fields: list[str]


def has_content_changed(old: Chapter, new: Chapter) -> bool:
    """True when the raw title or content strings differ."""
    return old.content != new.content or old.title != new.title


def percent_change(old_word_count: int, new_word_count: int) -> float:
    """Word-count change relative to the old count; 100 when the old count is zero."""
    if old_word_count <= 0:
        return 100.0
    return abs(new_word_count - old_word_count) / old_word_count * 100


def classify(old: Chapter, new: Chapter) -> Classification:
    """Label the change from ``old`` to ``new`` and list which fields differ.

    Uses the stored ``word_count`` of each chapter rather than recounting.
    """
    changed_fields = []
    if old.title != new.title:
        changed_fields.append(ChangedField.TITLE.value)
    if old.content != new.content:
        changed_fields.append(ChangedField.CONTENT.value)

    title_changed = ChangedField.TITLE.value in changed_fields
    content_changed = ChangedField.CONTENT.value in changed_fields

    if title_changed and content_changed:
        label = VersionLabel.TITLE_AND_CONTENT
    elif title_changed:
        label = VersionLabel.TITLE
    elif content_changed:
        pct = percent_change(old.word_count, new.word_count)
        if pct > MAJOR_EDIT_PERCENT:
            label = VersionLabel.MAJOR_EDIT
        elif pct > MODERATE_EDIT_PERCENT:
            label = VersionLabel.MODERATE_EDIT
        else:
            label = VersionLabel.MINOR_EDIT
    else:
        label = VersionLabel.MANUAL_SAVE

    return Classification(label=label.value, changed_fields=changed_fields)
