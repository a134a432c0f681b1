import pytest

from licensekit.events import EventRegistry, EventType, Severity
from licensekit.license_reader import FullLicenseInfo
from licensekit.verifier import NO_EXPIRY_DAYS_LEFT, LicenseVerifier


def _info(limits=None, magic=0):
    return FullLicenseInfo("lic.ini", "myprod", "good", magic=magic, limits=dict(limits or {}))


def _check(data, signature):
    return signature == "good"


def _verifier(identifier_check=None):
    registry = EventRegistry()
    return LicenseVerifier(registry, _check, identifier_check), registry


def test_valid_signature_recorded():
    calls = []

    def check(data, signature):
        calls.append((data, signature))
        return True

    registry = EventRegistry()
    info = _info({"lic_ver": "200"})
    assert LicenseVerifier(registry, check).verify_signature(info) is True
    assert calls == [(info.print_for_sign(), "good")]
    event = list(registry)[-1]
    assert event.event_type is EventType.SIGNATURE_VERIFIED
    assert event.license_reference == "lic.ini"


def test_invalid_signature_is_corrupted():
    verifier, registry = _verifier()
    info = FullLicenseInfo("lic.ini", "myprod", "forged")
    assert verifier.verify_signature(info) is False
    event = list(registry)[-1]
    assert event.event_type is EventType.LICENSE_CORRUPTED
    assert event.severity is Severity.WARN


def test_no_limits_is_valid():
    verifier, registry = _verifier()
    assert verifier.verify_limits(_info()) is True
    assert len(registry) == 0


def test_expired_license():
    verifier, registry = _verifier()
    assert verifier.verify_limits(_info({"valid-to": "2000-01-01"})) is False
    event = list(registry)[-1]
    assert event.event_type is EventType.PRODUCT_EXPIRED
    assert event.info == "Expired 2000-01-01"


def test_not_yet_valid_license():
    verifier, registry = _verifier()
    assert verifier.verify_limits(_info({"valid-from": "2099-01-01"})) is False
    event = list(registry)[-1]
    assert event.event_type is EventType.PRODUCT_EXPIRED
    assert event.info == "Valid from 2099-01-01"


def test_within_validity_period():
    verifier, _ = _verifier()
    limits = {"valid-from": "2000-01-01", "valid-to": "2099-01-01"}
    assert verifier.verify_limits(_info(limits)) is True


def test_wrong_magic_stops_other_checks():
    verifier, registry = _verifier()
    assert verifier.verify_limits(_info({"valid-to": "2000-01-01"}, magic=7)) is False
    assert [e.event_type for e in registry] == [EventType.LICENSE_CORRUPTED]


def test_client_signature_checked():
    codes = []

    def identifier_check(code):
        codes.append(code)
        return EventType.LICENSE_OK

    verifier, registry = _verifier(identifier_check)
    assert verifier.verify_limits(_info({"client-signature": "AAAA-BBBB-CCCC"})) is True
    assert codes == ["AAAA-BBBB-CCCC"]
    assert list(registry)[-1].event_type is EventType.LICENSE_OK


def test_client_signature_without_checker_mismatches():
    verifier, registry = _verifier()
    assert verifier.verify_limits(_info({"client-signature": "AAAA-BBBB-CCCC"})) is False
    assert list(registry)[-1].event_type is EventType.IDENTIFIERS_MISMATCH


def test_license_info_without_expiry():
    verifier, _ = _verifier()
    info = verifier.to_license_info(_info())
    assert info.has_expiry is False
    assert info.days_left == NO_EXPIRY_DAYS_LEFT
    assert info.expiry_date == ""
    assert info.linked_to_pc is False
    assert info.license_type == "LOCAL"


def test_license_info_with_future_expiry():
    verifier, _ = _verifier()
    info = verifier.to_license_info(_info({"valid-to": "2099-01-01"}))
    assert info.has_expiry is True
    assert info.expiry_date == "2099-01-01"
    assert info.days_left > 365


def test_license_info_expired_has_no_days_left():
    verifier, _ = _verifier()
    assert verifier.to_license_info(_info({"valid-to": "2000-01-01"})).days_left == 0


def test_license_info_link_and_extra_data():
    verifier, _ = _verifier()
    info = verifier.to_license_info(
        _info({"client-signature": "AAAA-BBBB-CCCC", "extra-data": "payload"})
    )
    assert info.linked_to_pc is True
    assert info.proprietary_data == "payload"


def test_bad_date_raises():
    verifier, _ = _verifier()
    with pytest.raises(ValueError):
        verifier.verify_limits(_info({"valid-to": "soon"}))
    with pytest.raises(ValueError):
        verifier.to_license_info(_info({"valid-to": "soon"}))