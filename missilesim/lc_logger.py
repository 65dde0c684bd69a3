"""A thread-safe, append-only, timestamped log file."""

from __future__ import annotations

import threading
import time
from typing import Optional, TextIO

__all__ = ["LcLogger"]


class LcLogger:
    """Appends ``[<local time>] <message>`` lines to a file."""

    def __init__(self) -> None:
        self._file: Optional[TextIO] = None
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def start_logging(self, filename) -> None:
        """Open ``filename`` for appending; raises OSError if it cannot be opened."""
        handle = open(filename, "a", encoding="utf-8")
        with self._lock:
            if self._file is not None:
                self._file.close()
            self._file = handle

    def log_message(self, message: str) -> None:
        """Append one timestamped line; does nothing while no file is open."""
        with self._lock:
            if self._file is None:
                return
            self._file.write(f"[{time.ctime()}] {message}\n")
            self._file.flush()

    def stop_logging(self) -> None:
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def __enter__(self) -> "LcLogger":
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop_logging()