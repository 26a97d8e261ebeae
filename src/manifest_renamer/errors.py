"""
Run-level errors.

Each one aborts a run. They subclass OSError so callers that only care about
"something went wrong on disk" can catch that. Per-line rename failures are not
raised; they are collected in RenameOutcome records instead.
"""

from __future__ import annotations


class ManifestRenamerError(OSError):
    """Base class for errors that abort a manifest run."""


class WorkingDirectoryError(ManifestRenamerError):
    """The current working directory could not be determined."""


class PathNotFoundError(ManifestRenamerError):
    """The target directory does not exist."""


class ManifestMissingError(ManifestRenamerError):
    """The target directory has no manifest file."""


class ManifestReadError(ManifestRenamerError):
    """The manifest exists but could not be opened or read."""


class ManifestDeleteError(ManifestRenamerError):
    """Deleting the manifest after processing failed."""
