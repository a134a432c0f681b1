"""Append-only diagnostic log kept in the temporary directory."""

from __future__ import annotations

import os
import tempfile
import time
from typing import TextIO

_LOG_NAME = "open-license.log"


class _LogState:
    handle: TextIO | None = None


_state = _LogState()


def log_path() -> str:
    """Where the log file lives."""
    if os.name == "nt":
        return os.path.join(tempfile.gettempdir(), _LOG_NAME)
    folder = os.environ.get("TMPDIR") or "/tmp"
    return f"{folder}/{_LOG_NAME}"


def log(message: str) -> None:
    """Write a time-stamped line; silently does nothing if the log can't be opened."""
    if _state.handle is None:
        try:
            _state.handle = open(log_path(), "a", encoding="utf-8")
        except OSError:
            return
    stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
    line = stamp + message
    if not line.endswith("\n"):
        line += "\n"
    _state.handle.write(line)
    _state.handle.flush()


def shutdown_log() -> None:
    """Close the log file; the next message opens it again."""
    if _state.handle is not None:
        _state.handle.close()
        _state.handle = None