"""Checks a license's signature and limits."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Callable

from .events import (
    PARAM_BEGIN_DATE,
    PARAM_CLIENT_SIGNATURE,
    PARAM_EXPIRY_DATE,
    PARAM_EXTRA_DATA,
    AuditEvent,
    EventRegistry,
    EventType,
)
from .license_reader import FullLicenseInfo
from .string_utils import seconds_from_epoch

SignatureCheck = Callable[[str, str], bool]
IdentifierCheck = Callable[[str], EventType]

NO_EXPIRY_DAYS_LEFT = 9999
_SECONDS_PER_DAY = 60 * 60 * 24


@dataclass
class LicenseInfo:
    """What a caller learns about a license."""

    license_type: str = "LOCAL"
    expiry_date: str = ""
    has_expiry: bool = False
    days_left: int = 0
    linked_to_pc: bool = False
    proprietary_data: str = ""
    status: list[AuditEvent] = field(default_factory=list)


class LicenseVerifier:
    """Verifies licenses, recording the outcome in an event registry.

    ``signature_check(data, signature)`` tells whether a signature is valid;
    ``identifier_check(code)`` validates a hardware identifier. Without an
    identifier check, licenses bound to a machine never match.
    """

    def __init__(
        self,
        registry: EventRegistry,
        signature_check: SignatureCheck,
        identifier_check: IdentifierCheck | None = None,
    ):
        self.registry = registry
        self.signature_check = signature_check
        self.identifier_check = identifier_check
        self.expected_magic = 0

    def verify_signature(self, license_info: FullLicenseInfo) -> bool:
        valid = bool(
            self.signature_check(license_info.print_for_sign(), license_info.license_signature)
        )
        event = EventType.SIGNATURE_VERIFIED if valid else EventType.LICENSE_CORRUPTED
        self.registry.add_event(event, license_info.source)
        return valid

    def verify_limits(self, license_info: FullLicenseInfo) -> bool:
        """Check magic, validity dates and machine binding, stopping at the first failure."""
        source = license_info.source
        limits = license_info.limits
        valid = license_info.magic == self.expected_magic
        if not valid:
            self.registry.add_event(EventType.LICENSE_CORRUPTED, source)
        now = time.time()

        expiry = limits.get(PARAM_EXPIRY_DATE)
        if valid and expiry is not None and seconds_from_epoch(expiry) < now:
            self.registry.add_event(EventType.PRODUCT_EXPIRED, source, "Expired " + expiry)
            valid = False

        start = limits.get(PARAM_BEGIN_DATE)
        if valid and start is not None and seconds_from_epoch(start) > now:
            self.registry.add_event(EventType.PRODUCT_EXPIRED, source, "Valid from " + start)
            valid = False

        client_signature = limits.get(PARAM_CLIENT_SIGNATURE)
        if valid and client_signature is not None:
            if self.identifier_check is None:
                event = EventType.IDENTIFIERS_MISMATCH
            else:
                event = self.identifier_check(client_signature)
            self.registry.add_event(event, source)
            valid = event is EventType.LICENSE_OK
        return valid

    def to_license_info(self, license_info: FullLicenseInfo) -> LicenseInfo:
        limits = license_info.limits
        info = LicenseInfo()
        expiry = limits.get(PARAM_EXPIRY_DATE)
        if expiry is not None:
            info.expiry_date = expiry
            info.has_expiry = True
            seconds = seconds_from_epoch(expiry) - time.time()
            info.days_left = max(math.floor(seconds / _SECONDS_PER_DAY + 0.5), 0)
        else:
            info.has_expiry = False
            info.days_left = NO_EXPIRY_DAYS_LEFT
            info.expiry_date = ""
        info.linked_to_pc = PARAM_CLIENT_SIGNATURE in limits
        extra = limits.get(PARAM_EXTRA_DATA)
        if extra is not None:
            info.proprietary_data = extra
        return info