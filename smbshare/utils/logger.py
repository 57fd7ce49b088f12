"""
Logging utilities for smbshare
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

NO_COLOR = False


class FlushStreamHandler(logging.StreamHandler):
    def emit(self, record):
        super().emit(record)
        try:
            self.flush()
        except Exception:
            pass


class FlushFileHandler(logging.FileHandler):
    def emit(self, record):
        super().emit(record)
        try:
            self.flush()
        except Exception:
            pass


class Colors:
    RED = '\033[91m'
    YELLOW = '\033[93m'
    GREEN = '\033[92m'
    GRAY = '\033[37m'
    RESET = '\033[0m'
    BOLD = '\033[1m'


class SmbShareConsoleFormatter(logging.Formatter):
    LEVEL_COLORS = {
        'DEBUG': Colors.GRAY,
        'INFO': Colors.GREEN,
        'WARNING': Colors.YELLOW,
        'ERROR': Colors.RED,
        'CRITICAL': Colors.RED + Colors.BOLD,
    }

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime(
            '%Y-%m-%d %H:%M:%S'
        )
        level = record.levelname
        message = record.getMessage()

        if not NO_COLOR and sys.stderr.isatty():
            color = self.LEVEL_COLORS.get(level, '')
            return (
                f"{Colors.GRAY}[{timestamp}]{Colors.RESET} "
                f"{color}[{level}]{Colors.RESET} {message}"
            )

        return f"[{timestamp}] [{level}] {message}"


class SmbShareFileFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime(
            '%Y-%m-%d %H:%M:%S'
        )
        return f"[{timestamp}] [{record.levelname}] {record.getMessage()}"


class SmbShareJSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }

        for field in ("path", "status"):
            if hasattr(record, field):
                data[field] = getattr(record, field)

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        return json.dumps(data)


def setup_logging(
        log_level: str = "info",
        log_file_path: Optional[str] = None,
        log_to_console: bool = True,
        log_type: str = "plain",
) -> logging.Logger:
    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    level = level_map.get((log_level or "info").lower(), logging.INFO)

    logger = logging.getLogger("smbshare")
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    # stdout carries command output (listings, file contents)
    if log_to_console:
        ch = FlushStreamHandler(sys.stderr)
        ch.setLevel(level)
        ch.setFormatter(SmbShareConsoleFormatter())
        logger.addHandler(ch)

    if log_file_path:
        path = Path(log_file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        fh = FlushFileHandler(path, mode="a", encoding="utf-8", errors="replace")
        fh.setLevel(level)
        if log_type == "json":
            fh.setFormatter(SmbShareJSONFormatter())
        else:
            fh.setFormatter(SmbShareFileFormatter())
        logger.addHandler(fh)

    return logger
