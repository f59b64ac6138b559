"""Entry points: identifying this machine and acquiring a license."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from .constants import EventType, Strategy
from .event_registry import EventRegistry
from .facade import generate_user_pc_signature
from .license_reader import LicenseReader
from .license_verifier import LicenseInfo, LicenseVerifier, SignatureCheck
from .logger import get_logger
from .strategies import HardwareSnapshot, IdentifierUnavailable

DEFAULT_PROJECT_NAME = "DEFAULT"
AUDIT_EVENT_NUM = 5


@dataclass
class AcquireResult:
    """Outcome of acquiring a license."""

    event: EventType
    license: LicenseInfo
    registry: EventRegistry

    @property
    def ok(self) -> bool:
        return self.event == EventType.LICENSE_OK


def identify_pc(
    strategy: Strategy | int = Strategy.DEFAULT,
    hardware: HardwareSnapshot | None = None,
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """Return the hardware signature of this machine, or None if it cannot be computed."""
    try:
        return generate_user_pc_signature(strategy, hardware, environ)
    except (IdentifierUnavailable, ValueError) as exc:
        get_logger().error("Error calculating hw_identifier: %s", exc)
        return None


def merge_licenses(licenses: Iterable[LicenseInfo]) -> LicenseInfo | None:
    """Pick the license that lasts longest: one without expiry, else the latest to expire."""
    best: LicenseInfo | None = None
    for lic in licenses:
        if not lic.has_expiry:
            return lic
        if best is None or lic.days_left > best.days_left:
            best = lic
    return best


def _failure_event(registry: EventRegistry) -> EventType:
    failure = registry.last_failure()
    return failure.event_type if failure is not None else EventType.LICENSE_FILE_NOT_FOUND


def acquire_license(
    project: str,
    sources: Sequence[str | os.PathLike] | str,
    signature_check: SignatureCheck,
    hardware: HardwareSnapshot | None = None,
    magic: int = 0,
) -> AcquireResult:
    """Find, verify and summarise the license of a project.

    An empty project name means the default project. Raise ValueError when a
    license holds a date that cannot be read.
    """
    name = project or DEFAULT_PROJECT_NAME
    licenses, registry = LicenseReader(sources).read_licenses(name)

    if licenses:
        verifier = LicenseVerifier(registry, signature_check, hardware)
        valid: list[LicenseInfo] = []
        invalid: list[LicenseInfo] = []
        for full_info in licenses:
            full_info.magic = magic
            signature_ok = verifier.verify_signature(full_info)
            info = verifier.to_license_info(full_info)
            if signature_ok and verifier.verify_limits(full_info):
                valid.append(info)
            else:
                invalid.append(info)
        if valid:
            registry.turn_errors_into_warnings()
            event = EventType.LICENSE_OK
            chosen = merge_licenses(valid)
        else:
            registry.turn_warnings_into_errors()
            event = _failure_event(registry)
            chosen = merge_licenses(invalid)
        license_info = chosen if chosen is not None else LicenseInfo()
    else:
        registry.turn_warnings_into_errors()
        event = _failure_event(registry)
        license_info = LicenseInfo()

    license_info.status = registry.last_events(AUDIT_EVENT_NUM)
    return AcquireResult(event, license_info, registry)