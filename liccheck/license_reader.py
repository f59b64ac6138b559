"""Reading license files: one ini section per licensed product."""

from __future__ import annotations

import os
import re
import string
from collections.abc import Iterable
from dataclasses import dataclass, field

from .constants import LICENSE_SIGNATURE, LICENSE_VERSION, EventType
from .event_registry import EventRegistry
from .files import filter_existing_files, get_file_contents
from .strings import split_string, trim

SUPPORTED_LICENSE_VERSION = 200
MAX_LICENSE_SIZE = 1 << 20

_C_SPACE = " \t\n\v\f\r"
_TO_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)
_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_LONG = re.compile(r"[ \t\n\v\f\r]*([+-]?)(0[xX][0-9a-fA-F]+|\d+)")


def _upper(text: str) -> str:
    return text.translate(_TO_UPPER)


def _lower(text: str) -> str:
    return text.translate(_TO_LOWER)


def _parse_long(value: str, default: int = -1) -> int:
    match = _LONG.match(value)
    if match is None:
        return default
    sign, digits = match.groups()
    number = int(digits, 16) if digits[:2].lower() == "0x" else int(digits)
    return -number if sign == "-" else number


def _parse_ini(text: str) -> dict[str, dict[str, tuple[str, str]]]:
    """Parse ini text into sections keyed by lower-cased name.

    Each section maps a lower-cased key to its spelling in the file and its value.
    """
    sections: dict[str, dict[str, tuple[str, str]]] = {}
    current = sections.setdefault("", {})
    for raw in text.splitlines():
        line = raw.strip(_C_SPACE)
        if not line or line[0] in ";#":
            continue
        if line[0] == "[":
            end = line.find("]")
            name = line[1:end] if end >= 0 else line[1:]
            current = sections.setdefault(_lower(name.strip(_C_SPACE)), {})
            continue
        key, sep, value = line.partition("=")
        key = key.strip(_C_SPACE)
        if not sep or not key:
            continue
        lowered = _lower(key)
        spelling = current[lowered][0] if lowered in current else key
        current[lowered] = (spelling, value.strip(_C_SPACE))
    return sections


@dataclass
class FullLicenseInfo:
    """Everything a license file says about one product."""

    source: str
    project: str
    license_signature: str
    magic: int = 0
    limits: dict[str, str] = field(default_factory=dict)

    def print_for_sign(self) -> str:
        """Return the text the license signature is computed over."""
        parts = [_upper(trim(self.project))]
        parts.extend(
            trim(key) + trim(value)
            for key, value in sorted(self.limits.items())
            if key != LICENSE_SIGNATURE
        )
        return "".join(parts)


class LicenseReader:
    """Reads the licenses of a product from a list of license files.

    ``sources`` is an iterable of paths, or one string of paths separated by ';'.
    """

    def __init__(self, sources: Iterable[str | os.PathLike] | str = ()) -> None:
        if isinstance(sources, str):
            self.sources = split_string(sources, ";")
        else:
            self.sources = [os.fspath(source) for source in sources]

    def read_licenses(self, product: str) -> tuple[list[FullLicenseInfo], EventRegistry]:
        """Return the complete licenses found for a product and the events met."""
        registry = EventRegistry()
        if not self.sources:
            registry.add_event(EventType.LICENSE_FILE_NOT_FOUND)
            registry.turn_warnings_into_errors()
            return [], registry

        section_name = _lower(_upper(product))
        licenses: list[FullLicenseInfo] = []
        for path in filter_existing_files(self.sources, registry):
            try:
                raw = get_file_contents(path, MAX_LICENSE_SIZE)
            except OSError:
                registry.add_event(EventType.LICENSE_FILE_NOT_FOUND, path)
                continue
            try:
                text = raw.decode("utf-8-sig")
            except UnicodeDecodeError:
                registry.add_event(EventType.FILE_FORMAT_NOT_RECOGNIZED, path)
                continue
            section = _parse_ini(text).get(section_name, {})
            if not section:
                registry.add_event(EventType.PRODUCT_NOT_LICENSED, path)
                continue
            registry.add_event(EventType.PRODUCT_FOUND, path)

            signature = section.get(_lower(LICENSE_SIGNATURE))
            version_entry = section.get(_lower(LICENSE_VERSION))
            version = _parse_long(version_entry[1]) if version_entry is not None else -1
            if signature is not None and version == SUPPORTED_LICENSE_VERSION:
                limits = dict(section.values())
                licenses.append(FullLicenseInfo(path, product, signature[1], limits=limits))
            else:
                registry.add_event(EventType.LICENSE_MALFORMED, path)

        if not licenses:
            registry.turn_warnings_into_errors()
        return licenses, registry