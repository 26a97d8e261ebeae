"""
Single-pair rename.

A failed rename is logged and recorded in the returned outcome, never raised:
one bad manifest line must not stop the lines after it.
"""

from __future__ import annotations

import errno
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .manifest import RenamePair

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenameOutcome:
    pair: RenamePair
    source: Path
    target: Path
    error: OSError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def rename_paths(pair: RenamePair, directory: str | Path, reverse: bool) -> tuple[Path, Path]:
    """Return (source, target) for pair inside directory."""
    wd = Path(directory)
    transformed = wd / pair.transformed_name
    original = wd / pair.original_name
    if reverse:
        return (original, transformed)
    return (transformed, original)


def _describe_error(exc: OSError, target: Path) -> OSError:
    if getattr(errno, "ENAMETOOLONG", None) is not None and exc.errno == errno.ENAMETOOLONG:
        return OSError(exc.errno, f"Filename too long for filesystem: {target.name!r}")
    return exc


def apply(pair: RenamePair, directory: str | Path, *, reverse: bool = False) -> RenameOutcome:
    """Rename one pair forward (transformed -> original) or in reverse."""
    source, target = rename_paths(pair, directory, reverse)
    if reverse:
        source_name, target_name = pair.original_name, pair.transformed_name
    else:
        source_name, target_name = pair.transformed_name, pair.original_name
    try:
        os.rename(source, target)
    except OSError as exc:
        err = _describe_error(exc, target)
        logger.error("Error renaming %s: %s", source_name, err)
        return RenameOutcome(pair=pair, source=source, target=target, error=err)
    logger.info("%s renamed to %s", source_name, target_name)
    return RenameOutcome(pair=pair, source=source, target=target)
