"""Apply or reverse a manifest-driven batch rename."""

from __future__ import annotations

from .errors import (
    ManifestDeleteError,
    ManifestMissingError,
    ManifestReadError,
    ManifestRenamerError,
    PathNotFoundError,
    WorkingDirectoryError,
)
from .manifest import RenamePair, load_manifest, parse_line
from .processor import RunOptions, RunReport, run

__all__ = [
    "ManifestDeleteError",
    "ManifestMissingError",
    "ManifestReadError",
    "ManifestRenamerError",
    "PathNotFoundError",
    "RenamePair",
    "RunOptions",
    "RunReport",
    "WorkingDirectoryError",
    "load_manifest",
    "parse_line",
    "run",
]
