from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

import yaml

from .errors import ManifestRenamerError, PathNotFoundError, WorkingDirectoryError
from .logging_utils import setup_logging
from .processor import RunOptions, run

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "MANIFEST_RENAMER_LOG_LEVEL"
LOG_FILE_ENV = "MANIFEST_RENAMER_LOG_FILE"

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _load_config_file(path: str | Path) -> dict:
    """Load JSON or YAML config file. Returns a dict (empty on error or unknown format)."""
    p = Path(path)
    if not p.exists():
        logger.warning("Config file not found, ignoring: %s", p)
        return {}
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not read config file %s: %s", p, exc)
        return {}
    suf = p.suffix.lower()
    try:
        if suf == ".json":
            data = json.loads(raw)
        elif suf in (".yaml", ".yml"):
            data = yaml.safe_load(raw) or {}
        else:
            logger.warning("Unsupported config file format (use .json, .yaml or .yml): %s", p)
            return {}
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        logger.warning("Invalid config file %s: %s", p, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s must contain a mapping, got %s", p, type(data).__name__)
        return {}
    return data


def _config_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _build_parser() -> argparse.ArgumentParser:
    # Exact option strings only: an unknown flag must never be taken for a known one.
    p = argparse.ArgumentParser(
        description="Rename files in a directory according to its manifest.txt "
        "(one 'transformed=original' mapping per line).",
        allow_abbrev=False,
        add_help=False,
    )
    p.add_argument("--help", action="help", help="Show this help message and exit.")
    p.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory containing manifest.txt (default: current directory).",
    )
    p.add_argument(
        "-r",
        "--reverse",
        dest="reverse",
        action="store_true",
        help="Reverse mode: rename original names back to transformed names.",
    )
    p.add_argument(
        "-m",
        "--delete-manifest",
        dest="delete_manifest",
        action="store_true",
        help="Delete manifest.txt after all renames have been attempted.",
    )
    p.add_argument(
        "--config",
        dest="config",
        default=None,
        metavar="FILE",
        help="Load defaults from JSON or YAML file; CLI options override.",
    )

    out = p.add_argument_group("Output")
    out.add_argument(
        "--quiet",
        dest="quiet",
        action="store_true",
        help="Less output (log level WARNING). Overridden by --verbose.",
    )
    out.add_argument(
        "--verbose",
        dest="verbose",
        action="store_true",
        help="More output (log level DEBUG). Overrides --quiet.",
    )
    out.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        metavar="PATH",
        help=f"Also write the log to PATH (default: env {LOG_FILE_ENV}, otherwise no log file).",
    )
    out.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        choices=_LOG_LEVELS,
        help=f"Log level (default: env {LOG_LEVEL_ENV} or INFO). Overridden by --verbose/--quiet.",
    )
    return p


def _is_flag(token: str) -> bool:
    return token.startswith("-") and token != "-"


def _is_known_flag(token: str, known: dict[str, argparse.Action]) -> bool:
    if token in known:
        return True
    # --option=value, only for options that take a value
    name, sep, _value = token.partition("=")
    return bool(sep) and name in known and known[name].nargs != 0


def _parse_args(argv: list[str] | None) -> tuple[argparse.Namespace, list[str]]:
    """
    Parse argv and return (args, ignored tokens).

    Dash-prefixed tokens that are not exact option strings are dropped before
    argparse sees them, so `--rev` or `-rx` change nothing. When the first
    remaining token is a flag, no directory is taken from argv even if a
    positional argument follows it.
    """
    if argv is None:
        argv = sys.argv[1:]
    parser = _build_parser()
    known = parser._option_string_actions
    kept: list[str] = []
    ignored: list[str] = []
    for token in argv:
        if _is_flag(token) and not _is_known_flag(token, known):
            ignored.append(token)
        else:
            kept.append(token)

    args, extras = parser.parse_known_args(kept)
    ignored.extend(extras)
    if kept and _is_flag(kept[0]) and args.path is not None:
        ignored.append(args.path)
        args.path = None
    return (args, ignored)


def _resolve_log_config(args: argparse.Namespace, file_defaults: dict) -> tuple[str | None, int]:
    """Resolve log file path and log level from args, config file and env. Returns (log_file_path, log_level)."""
    log_file = args.log_file or file_defaults.get("log_file") or os.environ.get(LOG_FILE_ENV) or None
    if args.verbose:
        return (log_file, logging.DEBUG)
    if args.quiet:
        return (log_file, logging.WARNING)
    level_name = args.log_level or file_defaults.get("log_level") or os.environ.get(LOG_LEVEL_ENV, "INFO")
    log_level = getattr(logging, str(level_name).strip().upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO
    return (log_file, log_level)


def _directory_from_args(args: argparse.Namespace) -> Path:
    if args.path is not None:
        if not args.path.strip():
            raise PathNotFoundError(f"The path does not exist: {args.path!r}")
        return Path(args.path)
    try:
        return Path.cwd()
    except OSError as exc:
        raise WorkingDirectoryError(f"Could not determine the current directory: {exc}") from exc


def resolve_directory(argv: list[str]) -> Path:
    """
    Return the target directory named by argv.

    If the first argument is not a flag it is used verbatim (its existence is
    checked later, by the run). If argv is empty or starts with a recognized
    flag, the current working directory is used.
    """
    args, _ignored = _parse_args(argv)
    return _directory_from_args(args)


def _build_options(args: argparse.Namespace, file_defaults: dict) -> RunOptions:
    return RunOptions(
        target_directory=_directory_from_args(args),
        reverse=args.reverse or _config_bool(file_defaults.get("reverse", False)),
        delete_manifest_after=args.delete_manifest or _config_bool(file_defaults.get("delete_manifest", False)),
    )


def main(argv: list[str] | None = None) -> None:
    args, ignored = _parse_args(argv)
    file_defaults = _load_config_file(args.config) if args.config else {}

    log_file, log_level = _resolve_log_config(args, file_defaults)
    setup_logging(log_file=log_file, level=log_level)

    if ignored:
        logger.debug("Ignoring arguments: %s", " ".join(ignored))

    try:
        options = _build_options(args, file_defaults)
    except ManifestRenamerError as exc:
        raise SystemExit(f"Problem parsing arguments: {exc}") from exc
    logger.debug("Options: %s", options)

    try:
        report = run(options)
    except ManifestRenamerError as exc:
        raise SystemExit(f"Application error: {exc}") from exc
    if report.failed:
        logger.warning("%s rename(s) failed; see messages above.", report.failed)
