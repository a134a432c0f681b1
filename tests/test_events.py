import pytest

from licensekit.events import (
    UNDEFINED_REFERENCE,
    EventRegistry,
    EventType,
    Severity,
)


def test_success_event_is_info_and_failure_is_warning():
    registry = EventRegistry()
    ok = registry.add_event(EventType.LICENSE_FOUND, "lic")
    bad = registry.add_event(EventType.LICENSE_MALFORMED, "lic")
    assert ok.severity is Severity.INFO
    assert bad.severity is Severity.WARN
    assert registry.current_step == 1


def test_missing_reference_is_undefined():
    registry = EventRegistry()
    event = registry.add_event(EventType.LICENSE_FILE_NOT_FOUND)
    assert event.license_reference == UNDEFINED_REFERENCE
    assert event.info == ""


def test_empty_registry():
    registry = EventRegistry()
    assert registry.last_failure() is None
    assert registry.is_good() is True
    assert registry.turn_warnings_into_errors() is False
    assert len(registry) == 0


def test_warning_becomes_error_and_back():
    registry = EventRegistry()
    registry.add_event(EventType.LICENSE_SPECIFIED, "a")
    registry.add_event(EventType.LICENSE_FILE_NOT_FOUND, "a")
    assert registry.is_good()
    assert registry.turn_warnings_into_errors() is True
    failure = registry.last_failure()
    assert failure.event_type is EventType.LICENSE_FILE_NOT_FOUND
    assert failure.severity is Severity.ERROR
    assert not registry.is_good()
    assert registry.turn_errors_into_warnings() is True
    assert registry.is_good()


def test_only_most_advanced_license_warning_is_promoted():
    registry = EventRegistry()
    registry.add_event(EventType.LICENSE_FOUND, "b")
    registry.add_event(EventType.PRODUCT_FOUND, "a")
    b_warning = registry.add_event(EventType.PRODUCT_NOT_LICENSED, "b")
    a_warning = registry.add_event(EventType.LICENSE_MALFORMED, "a")
    assert registry.turn_warnings_into_errors()
    assert a_warning.severity is Severity.ERROR
    assert b_warning.severity is Severity.WARN
    assert registry.last_failure() is a_warning


def test_falls_back_to_latest_error():
    registry = EventRegistry()
    registry.add_event(EventType.PRODUCT_FOUND, "a")
    first = registry.add_event(EventType.LICENSE_FILE_NOT_FOUND, "x")
    second = registry.add_event(EventType.LICENSE_MALFORMED, "y")
    assert registry.turn_warnings_into_errors()
    assert first.severity is Severity.ERROR
    assert registry.last_failure() is second


def test_info_is_truncated():
    registry = EventRegistry()
    event = registry.add_event(EventType.PRODUCT_EXPIRED, "a", "x" * 400)
    assert event.info == "x" * 255


@pytest.mark.parametrize("count,expected", [(2, 2), (10, 3), (0, 0)])
def test_last_events(count, expected):
    registry = EventRegistry()
    for event in (EventType.LICENSE_SPECIFIED, EventType.LICENSE_FOUND, EventType.PRODUCT_FOUND):
        registry.add_event(event, "a")
    last = registry.last_events(count)
    assert len(last) == expected
    if expected:
        assert last[-1].event_type is EventType.PRODUCT_FOUND


def test_append_and_iterate():
    first = EventRegistry()
    first.add_event(EventType.LICENSE_SPECIFIED, "a")
    second = EventRegistry()
    second.add_event(EventType.LICENSE_CORRUPTED, "b")
    first.append(second)
    assert [e.event_type for e in first] == [
        EventType.LICENSE_SPECIFIED,
        EventType.LICENSE_CORRUPTED,
    ]


def test_str_mentions_events():
    registry = EventRegistry()
    registry.add_event(EventType.LICENSE_FOUND, "path")
    text = str(registry)
    assert text.startswith("EventReg[step:1,events:{")
    assert "ref:path" in text