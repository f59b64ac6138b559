"""File helpers for locating and reading license files."""

from __future__ import annotations

from collections.abc import Iterable

from .constants import EventType
from .event_registry import EventRegistry


def _readable(path: str) -> bool:
    try:
        with open(path, "rb"):
            return True
    except OSError:
        return False


def filter_existing_files(
    file_list: Iterable[str],
    registry: EventRegistry,
    extra_data: str | None = None,
) -> list[str]:
    """Return the files that can be opened, recording what was found in the registry."""
    existing: list[str] = []
    for path in file_list:
        registry.add_event(EventType.LICENSE_SPECIFIED, path, extra_data)
        if _readable(path):
            existing.append(path)
            registry.add_event(EventType.LICENSE_FOUND, path, extra_data)
        else:
            registry.add_event(EventType.LICENSE_FILE_NOT_FOUND, path, extra_data)
    return existing


def get_file_contents(filename: str, max_size: int) -> bytes:
    """Read at most ``max_size`` bytes of a file; raise OSError when it cannot be read."""
    with open(filename, "rb") as handle:
        return handle.read(max(0, max_size))


def remove_extension(path: str) -> str:
    """Strip the extension of the last path component, leaving dot-files alone."""
    if path in (".", ".."):
        return path
    dot = path.rfind(".")
    if dot < 0:
        return path
    separator = max(path.rfind("/"), path.rfind("\\"))
    if separator < 0:
        return path if dot == 0 else path[:dot]
    if separator >= dot + 1:
        return path
    return path[:dot]