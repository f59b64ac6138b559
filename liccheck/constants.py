"""Event types, severities, identification strategies and license-file keys."""

from __future__ import annotations

from enum import IntEnum

# License file parameters.
PARAM_EXPIRY_DATE = "valid-to"
PARAM_BEGIN_DATE = "valid-from"
PARAM_VERSION_FROM = "start-version"
PARAM_CLIENT_SIGNATURE = "client-signature"
PARAM_VERSION_TO = "end-version"
PARAM_EXTRA_DATA = "extra-data"

# License file extra entries.
LICENSE_SIGNATURE = "sig"
LICENSE_VERSION = "lic_ver"


class EventType(IntEnum):
    """Outcome of a step in locating and validating a license."""

    LICENSE_OK = 0
    LICENSE_FILE_NOT_FOUND = 1
    LICENSE_SERVER_NOT_FOUND = 2
    ENVIRONMENT_VARIABLE_NOT_DEFINED = 3
    FILE_FORMAT_NOT_RECOGNIZED = 4
    LICENSE_MALFORMED = 5
    PRODUCT_NOT_LICENSED = 6
    PRODUCT_EXPIRED = 7
    LICENSE_CORRUPTED = 8
    IDENTIFIERS_MISMATCH = 9
    LICENSE_SPECIFIED = 100
    LICENSE_FOUND = 101
    PRODUCT_FOUND = 102
    SIGNATURE_VERIFIED = 103


class Severity(IntEnum):
    """Severity of an audit event."""

    INFO = 0
    WARN = 1
    ERROR = 2


class Strategy(IntEnum):
    """Ways of computing a hardware identifier."""

    NONE = -2
    DEFAULT = -1
    ETHERNET = 0
    IP_ADDRESS = 1
    DISK = 2


_PROGRESS_BY_EVENT_TYPE = {
    EventType.LICENSE_SPECIFIED: 0,
    EventType.LICENSE_FOUND: 1,
    EventType.PRODUCT_FOUND: 2,
    EventType.SIGNATURE_VERIFIED: 3,
    EventType.LICENSE_OK: 4,
}


def progress_step(event: EventType) -> int | None:
    """Return the validation step a success event marks, or None for a failure event."""
    return _PROGRESS_BY_EVENT_TYPE.get(event)