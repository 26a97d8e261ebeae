from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .manifest import delete_manifest, load_manifest, parse_line, validate
from .rename_ops import RenameOutcome, apply

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunOptions:
    target_directory: Path
    reverse: bool = False  # original -> transformed
    delete_manifest_after: bool = False

    def __post_init__(self) -> None:
        # Accept str for convenience; keep the stored value a Path.
        object.__setattr__(self, "target_directory", Path(self.target_directory))


@dataclass(frozen=True)
class RunReport:
    directory: Path
    outcomes: list[RenameOutcome] = field(default_factory=list)
    manifest_deleted: bool = False

    @property
    def renamed(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)


def run(options: RunOptions) -> RunReport:
    """
    Process the manifest in options.target_directory.

    Raises PathNotFoundError, ManifestMissingError, ManifestReadError or
    ManifestDeleteError; any of these aborts the run. Per-line rename failures
    do not raise and are returned in the report.
    """
    directory = options.target_directory
    validate(directory)
    lines = load_manifest(directory)

    outcomes: list[RenameOutcome] = []
    for line in lines:
        pair = parse_line(line)
        outcomes.append(apply(pair, directory, reverse=options.reverse))

    failed = sum(1 for o in outcomes if not o.ok)
    logger.info(
        "Summary: %s line(s) processed, %s renamed, %s failed",
        len(outcomes),
        len(outcomes) - failed,
        failed,
    )

    deleted = False
    if options.delete_manifest_after:
        delete_manifest(directory)
        deleted = True
    return RunReport(directory=directory, outcomes=outcomes, manifest_deleted=deleted)
