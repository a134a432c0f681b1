"""Acquiring a license: read, verify and summarise."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from .events import EventRegistry, EventType
from .license_reader import LicenseReader, LicenseSource
from .verifier import IdentifierCheck, LicenseInfo, LicenseVerifier, SignatureCheck

AUDIT_EVENT_NUM = 5


@dataclass
class LicenseResult:
    """Outcome of acquiring a license."""

    event: EventType
    license: LicenseInfo
    registry: EventRegistry

    @property
    def ok(self) -> bool:
        return self.event is EventType.LICENSE_OK


def merge_licenses(licenses: Iterable[LicenseInfo]) -> LicenseInfo | None:
    """Pick the license that expires last; one without expiry wins at once."""
    chosen = None
    for license_info in licenses:
        if not license_info.has_expiry:
            return license_info
        if chosen is None or license_info.days_left > chosen.days_left:
            chosen = license_info
    return chosen


def _failure_event(registry: EventRegistry) -> EventType:
    failure = registry.last_failure()
    return EventType.LICENSE_FILE_NOT_FOUND if failure is None else failure.event_type


def acquire_license(
    sources: Iterable[LicenseSource],
    project: str,
    signature_check: SignatureCheck,
    identifier_check: IdentifierCheck | None = None,
    magic: int = 0,
) -> LicenseResult:
    """Find and verify the licenses of ``project`` among ``sources``."""
    if not project:
        raise ValueError("a project name is required")
    licenses, registry = LicenseReader(sources).read_licenses(project)

    if licenses:
        verifier = LicenseVerifier(registry, signature_check, identifier_check)
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
    else:
        registry.turn_warnings_into_errors()
        event = _failure_event(registry)
        chosen = LicenseInfo(proprietary_data="", linked_to_pc=False, days_left=0)

    assert chosen is not None
    chosen = replace(chosen, status=registry.last_events(AUDIT_EVENT_NUM))
    return LicenseResult(event, chosen, registry)