"""
Manifest file handling: locate, validate, read, parse and delete.

Format: one mapping per line, 'transformed_name=original_name'. No header, no
comments and no escaping; a name cannot contain the delimiter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import (
    ManifestDeleteError,
    ManifestMissingError,
    ManifestReadError,
    PathNotFoundError,
)

logger = logging.getLogger(__name__)

MANIFEST_FILE_NAME = "manifest.txt"
MANIFEST_DELIM = "="


@dataclass(frozen=True)
class RenamePair:
    transformed_name: str
    original_name: str = ""


def manifest_path(directory: str | Path) -> Path:
    return Path(directory) / MANIFEST_FILE_NAME


def validate(directory: str | Path) -> None:
    """Raise PathNotFoundError / ManifestMissingError unless directory holds a manifest."""
    path = Path(directory)
    if not path.exists():
        raise PathNotFoundError(f"The path does not exist: {path}")
    if not manifest_path(path).exists():
        raise ManifestMissingError(f"{path} does not contain a file named {MANIFEST_FILE_NAME}")


def _split_lines(raw: bytes) -> list[bytes]:
    lines = raw.split(b"\n")
    if lines and lines[-1] == b"":
        lines.pop()
    return [line[:-1] if line.endswith(b"\r") else line for line in lines]


def load_manifest(directory: str | Path) -> list[str]:
    """
    Read the manifest in directory and return its lines.

    Lines that are not valid UTF-8 are dropped without being reported to the
    caller; they only show up in the debug log.
    """
    path = manifest_path(directory)
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as exc:
        raise ManifestReadError(f"Error reading file {path}: {exc}") from exc

    lines: list[str] = []
    for lineno, line in enumerate(_split_lines(raw), start=1):
        try:
            lines.append(line.decode("utf-8"))
        except UnicodeDecodeError as exc:
            logger.debug("Dropping undecodable manifest line %d: %s", lineno, exc)
    return lines


def parse_line(raw: str) -> RenamePair:
    parts = raw.split(MANIFEST_DELIM)
    if len(parts) > 1:
        return RenamePair(transformed_name=parts[0], original_name=parts[1])
    return RenamePair(transformed_name=raw, original_name="")


def delete_manifest(directory: str | Path) -> None:
    path = manifest_path(directory)
    try:
        path.unlink()
    except OSError as exc:
        raise ManifestDeleteError(f"Error deleting manifest file {path}: {exc}") from exc
    logger.info("Deleted %s", path)
