"""String helpers: trimming, date parsing, splitting and format detection."""

from __future__ import annotations

import re
import time
from enum import Enum

_C_SPACE = " \t\n\v\f\r"


class FileFormat(Enum):
    """Format of license text."""

    INI = "ini"
    BASE64 = "base64"
    UNKNOWN = "unknown"


def trim(text: str) -> str:
    """Strip whitespace from both ends, and NUL characters from the end."""
    return text.lstrip(_C_SPACE).rstrip(_C_SPACE + "\0") if text.lstrip(_C_SPACE) else ""


def _scan(text: str, pattern: list) -> list[int] | None:
    """Read integers from text following a scanf-like pattern of widths and literals."""
    values: list[int] = []
    pos = 0
    for part in pattern:
        if isinstance(part, int):
            while pos < len(text) and text[pos] in _C_SPACE:
                pos += 1
            number = re.compile(rf"[+-]\d{{1,{part - 1}}}|\d{{1,{part}}}").match(text, pos)
            if number is None:
                break
            values.append(int(number.group()))
            pos = number.end()
        else:
            if not text.startswith(part, pos):
                break
            pos += len(part)
    return values if len(values) == 3 else None


def seconds_from_epoch(time_string: str) -> int:
    """Return local midnight of a YYYYMMDD, YYYY-MM-DD or YYYY/MM/DD date as epoch seconds."""
    if len(time_string) == 8:
        fields = _scan(time_string, [4, 2, 2])
        if fields is None:
            raise ValueError("Date not recognized")
    elif len(time_string) == 10:
        fields = _scan(time_string, [4, "-", 2, "-", 2]) or _scan(time_string, [4, "/", 2, "/", 2])
        if fields is None:
            raise ValueError(f"Date [{time_string}] not recognized")
    else:
        raise ValueError(f"Date [{time_string}] not recognized")
    year, month, day = fields
    try:
        return int(time.mktime((year, month, day, 0, 0, 0, -1, -1, -1)))
    except (OverflowError, ValueError) as exc:
        raise ValueError(f"Date [{time_string}] not recognized") from exc


def split_string(text: str, separator: str) -> list[str]:
    """Split on a character; a trailing separator yields no final empty piece."""
    if not text:
        return []
    parts = text.split(separator)
    if parts[-1] == "":
        parts.pop()
    return parts


_INI_SECTION = re.compile(r"\[.*?\]")
_BASE64 = re.compile(r"(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?")


def identify_format(license_text: str) -> FileFormat:
    """Tell whether license text is base64, ini, or neither."""
    if _BASE64.fullmatch(license_text):
        return FileFormat.BASE64
    if _INI_SECTION.search(license_text):
        return FileFormat.INI
    return FileFormat.UNKNOWN