"""Checking license signatures and limits."""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from .constants import (
    PARAM_BEGIN_DATE,
    PARAM_CLIENT_SIGNATURE,
    PARAM_EXPIRY_DATE,
    PARAM_EXTRA_DATA,
    EventType,
)
from .event_registry import AuditEvent, EventRegistry
from .facade import validate_pc_signature
from .license_reader import FullLicenseInfo
from .strategies import HardwareSnapshot
from .strings import seconds_from_epoch

SignatureCheck = Callable[[str, str], bool]

SECONDS_PER_DAY = 60 * 60 * 24
NO_EXPIRY_DAYS_LEFT = 9999


class LicenseType(Enum):
    """Where a license comes from."""

    LOCAL = "local"
    REMOTE = "remote"


@dataclass
class LicenseInfo:
    """What a caller learns about an acquired license."""

    license_type: LicenseType = LicenseType.LOCAL
    expiry_date: str = ""
    has_expiry: bool = False
    days_left: int = 0
    linked_to_pc: bool = False
    proprietary_data: str = ""
    status: list[AuditEvent] = field(default_factory=list)


class LicenseVerifier:
    """Verifies licenses, recording the outcome of each check in a registry.

    ``signature_check(data, signature)`` tells whether the signature is valid
    for the data. ``clock`` returns the current time in epoch seconds.
    """

    def __init__(
        self,
        registry: EventRegistry,
        signature_check: SignatureCheck,
        hardware: HardwareSnapshot | None = None,
        clock: Callable[[], float] = time.time,
        expected_magic: int = 0,
    ) -> None:
        self.registry = registry
        self.signature_check = signature_check
        self.hardware = hardware
        self.clock = clock
        self.expected_magic = expected_magic

    def verify_signature(self, lic_info: FullLicenseInfo) -> bool:
        """Check the license signature."""
        valid = bool(self.signature_check(lic_info.print_for_sign(), lic_info.license_signature))
        event = EventType.SIGNATURE_VERIFIED if valid else EventType.LICENSE_CORRUPTED
        self.registry.add_event(event, lic_info.source)
        return valid

    def verify_limits(self, lic_info: FullLicenseInfo) -> bool:
        """Check magic number, validity dates and hardware signature.

        Raise ValueError when a date in the license cannot be read.
        """
        valid = lic_info.magic == self.expected_magic
        if not valid:
            self.registry.add_event(EventType.LICENSE_CORRUPTED, lic_info.source)
        now = self.clock()

        expiry = lic_info.limits.get(PARAM_EXPIRY_DATE)
        if valid and expiry is not None and seconds_from_epoch(expiry) < now:
            self.registry.add_event(EventType.PRODUCT_EXPIRED, lic_info.source, f"Expired {expiry}")
            valid = False

        start = lic_info.limits.get(PARAM_BEGIN_DATE)
        if valid and start is not None and seconds_from_epoch(start) > now:
            self.registry.add_event(EventType.PRODUCT_EXPIRED, lic_info.source, f"Valid from {start}")
            valid = False

        client_sig = lic_info.limits.get(PARAM_CLIENT_SIGNATURE)
        if valid and client_sig is not None:
            event = validate_pc_signature(client_sig, self.hardware)
            self.registry.add_event(event, lic_info.source)
            valid = event == EventType.LICENSE_OK
        return valid

    def to_license_info(self, full_info: FullLicenseInfo) -> LicenseInfo:
        """Summarise a license for the caller; ValueError if its expiry date is unreadable."""
        info = LicenseInfo(license_type=LicenseType.LOCAL)
        expiry = full_info.limits.get(PARAM_EXPIRY_DATE)
        if expiry is not None:
            info.expiry_date = expiry
            info.has_expiry = True
            seconds = seconds_from_epoch(expiry) - self.clock()
            info.days_left = max(math.floor(seconds / SECONDS_PER_DAY + 0.5), 0)
        else:
            info.has_expiry = False
            info.days_left = NO_EXPIRY_DAYS_LEFT
            info.expiry_date = ""
        info.linked_to_pc = PARAM_CLIENT_SIGNATURE in full_info.limits
        extra = full_info.limits.get(PARAM_EXTRA_DATA)
        if extra is not None:
            info.proprietary_data = extra
        return info