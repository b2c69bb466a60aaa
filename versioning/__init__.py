"""Versioning package — chapter history engine."""

from versioning.differ import diff
from versioning.classifier import Classification, classify, has_content_changed, percent_change
from versioning.version_store import VersionStore, find_version, new_version_id
from versioning.restore import RestoreEngine, VersionComparison

__all__ = [
    "diff",
    "Classification",
    "classify",
    "has_content_changed",
    "percent_change",
    "VersionStore",
    "find_version",
    "new_version_id",
    "RestoreEngine",
    "VersionComparison",
]
