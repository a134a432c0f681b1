"""File helpers used while locating licenses."""

from __future__ import annotations

from typing import Iterable

from .events import EventRegistry, EventType


def filter_existing_files(
    paths: Iterable[str], registry: EventRegistry, extra_data: str | None = None
) -> list[str]:
    """Return the readable files among ``paths``, recording what was found."""
    existing = []
    for path in paths:
        registry.add_event(EventType.LICENSE_SPECIFIED, path, extra_data)
        try:
            with open(path, "rb"):
                pass
        except OSError:
            registry.add_event(EventType.LICENSE_FILE_NOT_FOUND, path, extra_data)
        else:
            existing.append(path)
            registry.add_event(EventType.LICENSE_FOUND, path, extra_data)
    return existing


def get_file_contents(filename: str, max_size: int) -> str:
    """Read at most ``max_size`` bytes of a file as text.

    Raises OSError if the file cannot be opened.
    """
    with open(filename, "rb") as handle:
        data = handle.read(max_size)
    return data.decode("utf-8", errors="replace")


def remove_extension(path: str) -> str:
    """Drop the extension of the last path component, if it has one."""
    if path in (".", ".."):
        return path
    dot = path.rfind(".")
    if dot == -1:
        return path
    separator = max(path.rfind("\\"), path.rfind("/"))
    if separator == -1:
        return path if dot == 0 else path[:dot]
    if separator >= dot + 1:
        return path
    return path[:dot]