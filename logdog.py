"""
Append-only diagnostic log.

Each call writes one JSON object per line to a daily file
``logdog-YYYY-MM-DD.json`` in the configured directory. Logging never raises:
write failures are dropped so the launcher keeps working without a log.
"""

import json
import os
import threading
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

import constants as cv

LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}

Fields = Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None]


def build_data(fields: Fields) -> Dict[str, Any]:
    """Turn a mapping or a sequence of (key, value) pairs into a dict.

    Raises:
        ValueError: If an item of the sequence is not a (key, value) pair
    """
    if not fields:
        return {}
    if isinstance(fields, dict):
        return {str(k): v for k, v in fields.items()}

    data = {}
    for item in fields:
        if not isinstance(item, tuple) or len(item) != 2:
            raise ValueError(f"log fields must be (key, value) pairs, got: {item!r}")
        key, value = item
        data[str(key)] = value
    return data


class Logger:
    """JSON-lines logger writing to one file per day"""

    def __init__(self, log_dir: str, level: str = "DEBUG"):
        if level not in LEVELS:
            raise ValueError(f"Unknown log level: {level}")
        self.log_dir = log_dir
        self.level = level
        self._lock = threading.Lock()

    def current_log_path(self, now: Optional[datetime] = None) -> str:
        now = now or datetime.now()
        return os.path.join(
            self.log_dir, f"{cv.LOG_FILE_PREFIX}-{now.strftime('%Y-%m-%d')}.json"
        )

    def log(self, level: str, message: str, fields: Fields = None) -> None:
        if LEVELS.get(level, 0) < LEVELS[self.level]:
            return

        now = datetime.now()
        entry = {
            "timestamp": now.strftime("%Y-%m-%d %H:%M:%S"),
            "level": level,
            "message": message,
        }
        try:
            data = build_data(fields)
        except ValueError as e:
            data = {"fields_error": str(e)}
        if data:
            entry["data"] = data

        with self._lock:
            try:
                os.makedirs(self.log_dir, exist_ok=True)
                line = json.dumps(entry, default=str, ensure_ascii=False)
                with open(self.current_log_path(now), "a", encoding="utf-8") as f:
                    f.write(line + "\n")
            except (OSError, TypeError, ValueError):
                pass

    def error(self, message: str, fields: Fields = None) -> None:
        self.log("ERROR", message, fields)

    def warn(self, message: str, fields: Fields = None) -> None:
        self.log("WARN", message, fields)

    def info(self, message: str, fields: Fields = None) -> None:
        self.log("INFO", message, fields)

    def debug(self, message: str, fields: Fields = None) -> None:
        self.log("DEBUG", message, fields)
