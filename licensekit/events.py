"""Audit events raised while locating and validating licenses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

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

UNDEFINED_REFERENCE = "UNDEF"
_MAX_INFO_LENGTH = 255


class EventType(Enum):
    """Everything that can happen to a license while it is being checked."""

    LICENSE_OK = "LICENSE_OK"
    LICENSE_FILE_NOT_FOUND = "LICENSE_FILE_NOT_FOUND"
    LICENSE_SERVER_NOT_FOUND = "LICENSE_SERVER_NOT_FOUND"
    ENVIRONMENT_VARIABLE_NOT_DEFINED = "ENVIRONMENT_VARIABLE_NOT_DEFINED"
    FILE_FORMAT_NOT_RECOGNIZED = "FILE_FORMAT_NOT_RECOGNIZED"
    LICENSE_MALFORMED = "LICENSE_MALFORMED"
    PRODUCT_NOT_LICENSED = "PRODUCT_NOT_LICENSED"
    PRODUCT_EXPIRED = "PRODUCT_EXPIRED"
    LICENSE_CORRUPTED = "LICENSE_CORRUPTED"
    IDENTIFIERS_MISMATCH = "IDENTIFIERS_MISMATCH"
    LICENSE_SPECIFIED = "LICENSE_SPECIFIED"
    LICENSE_FOUND = "LICENSE_FOUND"
    PRODUCT_FOUND = "PRODUCT_FOUND"
    SIGNATURE_VERIFIED = "SIGNATURE_VERIFIED"


class Severity(Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


# Success events and how far along the validation they bring a license.
_PROGRESS_BY_EVENT_TYPE = {
    EventType.LICENSE_SPECIFIED: 0,
    EventType.LICENSE_FOUND: 1,
    EventType.PRODUCT_FOUND: 2,
    EventType.SIGNATURE_VERIFIED: 3,
    EventType.LICENSE_OK: 4,
}


@dataclass
class AuditEvent:
    """One recorded event about one license."""

    event_type: EventType
    severity: Severity
    license_reference: str = UNDEFINED_REFERENCE
    info: str = ""


class EventRegistry:
    """Tracks license events and explains why a validation failed."""

    def __init__(self):
        self._logs: list[AuditEvent] = []
        self._most_advanced: dict[str, int] = {}
        self._current_step = -1

    @property
    def current_step(self) -> int:
        return self._current_step

    def add_event(self, event, license_reference=None, info=None) -> AuditEvent:
        """Record an event; success events advance the validation step."""
        step = _PROGRESS_BY_EVENT_TYPE.get(event)
        reference = UNDEFINED_REFERENCE if license_reference is None else license_reference
        audit = AuditEvent(
            event_type=event,
            severity=Severity.INFO if step is not None else Severity.WARN,
            license_reference=reference,
            info="" if info is None else info[:_MAX_INFO_LENGTH],
        )
        self._logs.append(audit)
        index = len(self._logs) - 1
        if step is not None:
            if step > self._current_step:
                self._most_advanced.clear()
                self._current_step = step
            if step == self._current_step:
                self._most_advanced[reference] = index
        elif reference in self._most_advanced:
            self._most_advanced[reference] = index
        return audit

    def append(self, other: EventRegistry) -> None:
        """Append the events of another registry."""
        self._logs.extend(other._logs)

    def _most_advanced_events(self) -> Iterator[AuditEvent]:
        for _, index in sorted(self._most_advanced.items()):
            yield self._logs[index]

    def turn_warnings_into_errors(self) -> bool:
        """Turn the warnings of the most advanced licenses into errors.

        If none of them has a warning, every warning becomes an error.
        """
        found = False
        for event in self._most_advanced_events():
            if event.severity in (Severity.WARN, Severity.ERROR):
                event.severity = Severity.ERROR
                found = True
        if not found:
            for event in self._logs:
                if event.severity is Severity.WARN:
                    event.severity = Severity.ERROR
                    found = True
        return found

    def turn_errors_into_warnings(self) -> bool:
        found = False
        for event in self._logs:
            if event.severity is Severity.ERROR:
                event.severity = Severity.WARN
                found = True
        return found

    def last_failure(self) -> AuditEvent | None:
        """The error of the most advanced license, else the latest error."""
        for event in self._most_advanced_events():
            if event.severity is Severity.ERROR:
                return event
        for event in reversed(self._logs):
            if event.severity is Severity.ERROR:
                return event
        return None

    def is_good(self) -> bool:
        return self.last_failure() is None

    def last_events(self, count: int) -> list[AuditEvent]:
        """The last ``count`` events, oldest first."""
        if count <= 0:
            return []
        return list(self._logs[-count:])

    def __iter__(self) -> Iterator[AuditEvent]:
        return iter(self._logs)

    def __len__(self) -> int:
        return len(self._logs)

    def __str__(self) -> str:
        events = "".join(
            f"[ev:{e.event_type.name},sev:{e.severity.name}ref:{e.license_reference}]"
            for e in self._logs
        )
        return f"EventReg[step:{self._current_step},events:{{{events}]"