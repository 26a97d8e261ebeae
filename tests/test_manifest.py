from __future__ import annotations

import pytest

from manifest_renamer import manifest
from manifest_renamer.errors import (
    ManifestDeleteError,
    ManifestMissingError,
    ManifestReadError,
    PathNotFoundError,
)
from manifest_renamer.manifest import RenamePair, parse_line


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("photo1.jpg=vacation.jpg", RenamePair("photo1.jpg", "vacation.jpg")),
        ("a=b=c", RenamePair("a", "b")),
        ("a==c", RenamePair("a", "")),
        ("=orig.txt", RenamePair("", "orig.txt")),
        (" spaced name .txt= kept .txt", RenamePair(" spaced name .txt", " kept .txt")),
    ],
)
def test_parse_line_splits_on_delimiter(line, expected) -> None:
    assert parse_line(line) == expected


def test_parse_line_without_delimiter_leaves_original_empty() -> None:
    pair = parse_line("onlyname")

    assert pair.transformed_name == "onlyname"
    assert pair.original_name == ""


def test_rename_pair_is_immutable() -> None:
    pair = RenamePair("a", "b")
    with pytest.raises(AttributeError):
        pair.original_name = "c"  # type: ignore[misc]


def test_validate_missing_directory(tmp_path) -> None:
    with pytest.raises(PathNotFoundError) as excinfo:
        manifest.validate(tmp_path / "missing")
    assert "does not exist" in str(excinfo.value)


def test_validate_missing_manifest(tmp_path) -> None:
    with pytest.raises(ManifestMissingError) as excinfo:
        manifest.validate(tmp_path)
    assert "manifest.txt" in str(excinfo.value)


def test_validate_accepts_directory_with_manifest(tmp_path) -> None:
    (tmp_path / "manifest.txt").write_text("", encoding="utf-8")
    manifest.validate(tmp_path)


def test_load_manifest_strips_line_terminators(tmp_path) -> None:
    (tmp_path / "manifest.txt").write_bytes(b"a=b\r\nc=d\ne=f\n")

    assert manifest.load_manifest(tmp_path) == ["a=b", "c=d", "e=f"]


def test_load_manifest_keeps_last_line_without_newline(tmp_path) -> None:
    (tmp_path / "manifest.txt").write_bytes(b"a=b\nc=d")

    assert manifest.load_manifest(tmp_path) == ["a=b", "c=d"]


def test_load_manifest_drops_undecodable_lines(tmp_path) -> None:
    (tmp_path / "manifest.txt").write_bytes(b"a=b\n\xff\xfe=broken\nc=d\n")

    assert manifest.load_manifest(tmp_path) == ["a=b", "c=d"]


def test_load_manifest_reads_utf8_names(tmp_path) -> None:
    (tmp_path / "manifest.txt").write_text("x1=Überweisung.pdf\n", encoding="utf-8")

    assert manifest.load_manifest(tmp_path) == ["x1=Überweisung.pdf"]


def test_load_manifest_raises_read_error_when_unopenable(tmp_path) -> None:
    # A directory named manifest.txt exists but cannot be opened as a file.
    (tmp_path / "manifest.txt").mkdir()

    with pytest.raises(ManifestReadError) as excinfo:
        manifest.load_manifest(tmp_path)
    assert "Error reading file" in str(excinfo.value)


def test_delete_manifest_removes_file(tmp_path) -> None:
    (tmp_path / "manifest.txt").write_text("a=b\n", encoding="utf-8")

    manifest.delete_manifest(tmp_path)

    assert not (tmp_path / "manifest.txt").exists()


def test_delete_manifest_raises_when_already_gone(tmp_path) -> None:
    with pytest.raises(ManifestDeleteError):
        manifest.delete_manifest(tmp_path)
