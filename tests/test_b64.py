import pytest

from licensekit.b64 import decode, encode


def test_known_value_without_wrapping():
    assert encode(b"Man", 0) == "TWFu"


def test_default_adds_trailing_newline():
    assert encode(b"Man") == "TWFu\n"


def test_wrapped_lines():
    assert encode(bytes(8), 5) == "AAAA\nAAAA\nAAA=\n"


def test_decode_known_value():
    assert decode("TWFu") == b"Man"


@pytest.mark.parametrize(
    "data",
    [b"\x00\x01\x02", b"abcd", b"abcde", b"\xff" * 8, bytes(range(40))],
)
@pytest.mark.parametrize("line_length", [0, -1, 5, 17])
def test_round_trip(data, line_length):
    assert decode(encode(data, line_length)) == data


def test_wrapped_lines_have_fixed_width():
    text = encode(bytes(range(30)), 9)
    lines = text.split("\n")
    assert lines[-1] == ""
    assert all(len(line) == 8 for line in lines[:-2])
    assert 0 < len(lines[-2]) <= 8


def test_decode_too_short():
    with pytest.raises(ValueError):
        decode("x")