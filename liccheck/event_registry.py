"""Audit trail of the events met while locating and validating licenses."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .constants import EventType, Severity, progress_step

UNDEFINED_REFERENCE = "UNDEF"
_MAX_INFO_LENGTH = 255


@dataclass
class AuditEvent:
    """One event: what happened, how bad it is and which license it concerns."""

    event_type: EventType
    severity: Severity
    license_reference: str = UNDEFINED_REFERENCE
    info: str = ""


class EventRegistry:
    """Collects audit events and explains why license validation failed.

    For every license reference it remembers the event of the license that
    progressed furthest through the validation steps.
    """

    def __init__(self) -> None:
        self._logs: list[AuditEvent] = []
        self._most_advanced: dict[str, int] = {}
        self.current_validation_step = -1

    @property
    def events(self) -> tuple[AuditEvent, ...]:
        """All recorded events, oldest first."""
        return tuple(self._logs)

    def __len__(self) -> int:
        return len(self._logs)

    def __str__(self) -> str:
        body = "".join(
            f"[ev:{int(ev.event_type)},sev:{int(ev.severity)}ref:{ev.license_reference}]"
            for ev in self._logs
        )
        return f"EventReg[step:{self.current_validation_step},events:{{{body}]"

    def append(self, other: EventRegistry) -> None:
        """Add copies of the events of another registry."""
        self._logs.extend(replace(ev) for ev in other._logs)

    def add_event(
        self,
        event: EventType,
        license_reference: str | None = None,
        info: str | None = None,
    ) -> AuditEvent:
        """Record an event and return it."""
        step = progress_step(event)
        audit = AuditEvent(
            event_type=EventType(event),
            severity=Severity.INFO if step is not None else Severity.WARN,
            license_reference=UNDEFINED_REFERENCE if license_reference is None else license_reference,
            info="" if info is None else info[:_MAX_INFO_LENGTH],
        )
        self._logs.append(audit)
        index = len(self._logs) - 1
        if step is not None:
            if step > self.current_validation_step:
                self._most_advanced.clear()
                self.current_validation_step = step
            if step == self.current_validation_step:
                self._most_advanced[audit.license_reference] = index
        elif audit.license_reference in self._most_advanced:
            self._most_advanced[audit.license_reference] = index
        return audit

    def _most_advanced_events(self):
        for reference in sorted(self._most_advanced):
            yield self._logs[self._most_advanced[reference]]

    def turn_warnings_into_errors(self) -> bool:
        """Turn the warnings of the most advanced licenses into errors.

        If none of them holds a warning or error, every warning becomes an error.
        Return whether any event was found to change.
        """
        found = False
        for event in self._most_advanced_events():
            if event.severity in (Severity.WARN, Severity.ERROR):
                event.severity = Severity.ERROR
                found = True
        if not found:
            for event in self._logs:
                if event.severity == Severity.WARN:
                    event.severity = Severity.ERROR
                    found = True
        return found

    def turn_errors_into_warnings(self) -> bool:
        """Downgrade every error to a warning; return whether there was any."""
        found = False
        for event in self._logs:
            if event.severity == Severity.ERROR:
                event.severity = Severity.WARN
                found = True
        return found

    def last_failure(self) -> AuditEvent | None:
        """Return the error of the most advanced license, else the latest error, else None."""
        for event in self._most_advanced_events():
            if event.severity == Severity.ERROR:
                return event
        for event in reversed(self._logs):
            if event.severity == Severity.ERROR:
                return event
        return None

    def is_good(self) -> bool:
        """True when no error has been recorded."""
        return self.last_failure() is None

    def last_events(self, count: int) -> list[AuditEvent]:
        """Return copies of the most recent ``count`` events, oldest first."""
        size = max(0, min(count, len(self._logs)))
        if size == 0:
            return []
        return [replace(ev) for ev in self._logs[-size:]]