from __future__ import annotations

import json
import logging
import os
from pathlib import Path

STRUCTURED_LOGS_ENV = "MANIFEST_RENAMER_STRUCTURED_LOGS"


class StructuredLogFormatter(logging.Formatter):
    """One JSON object per log line: timestamp, level, logger, message and, if any, exception."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def structured_logs_enabled() -> bool:
    return os.environ.get(STRUCTURED_LOGS_ENV, "").strip().lower() in ("1", "true", "yes")


def setup_logging(*, log_file: str | Path | None = None, level: int = logging.INFO) -> None:
    """
    Configure the root logger: a stream handler (stderr) and, only when log_file
    is given, a UTF-8 file handler. Existing handlers of either kind are kept.
    """
    root = logging.getLogger()
    root.setLevel(level)

    if structured_logs_enabled():
        formatter: logging.Formatter = StructuredLogFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")

    # Exact types: handler subclasses installed by other tools do not count.
    if not any(type(h) is logging.StreamHandler for h in root.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if log_file and not any(type(h) is logging.FileHandler for h in root.handlers):
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(str(log_path), encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError:
            root.debug("Could not create file handler for %s", log_file)
