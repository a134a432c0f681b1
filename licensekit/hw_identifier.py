"""Hardware identifiers: eight bytes shown as three dash-separated base64 groups."""

from __future__ import annotations

from enum import IntEnum

from . import b64

PROPRIETARY_DATA_SIZE = 7
_IDENTIFIER_SIZE = PROPRIETARY_DATA_SIZE + 1
_ENV_VAR_FLAG = 0x40
_LOW_BITS = 0x1F


class Strategy(IntEnum):
    """Ways of computing a hardware identifier."""

    NONE = -2
    DEFAULT = -1
    ETHERNET = 0
    IP_ADDRESS = 1
    DISK = 2
    MOTHERBOARD_DISK = 3


class HwIdentifier:
    """A hardware identifier.

    Byte 0 carries flags (bit 6: an environment variable chose the strategy).
    Byte 1 holds the strategy in its top three bits and the low five bits of
    the first strategy data byte; bytes 2-7 hold the rest of the strategy data.
    """

    def __init__(self, data: bytes | None = None):
        if data is None:
            self._data = bytearray(_IDENTIFIER_SIZE)
            return
        raw = bytearray(data)
        if len(raw) != _IDENTIFIER_SIZE:
            raise ValueError(f"identifier needs {_IDENTIFIER_SIZE} bytes, got {len(raw)}")
        self._data = raw

    @classmethod
    def parse(cls, code: str) -> HwIdentifier:
        """Read an identifier from its printed form."""
        try:
            decoded = b64.decode(code.replace("-", "\n"))
        except ValueError:
            decoded = b""
        if len(decoded) != _IDENTIFIER_SIZE:
            raise ValueError(f"wrong identifier size {code}")
        return cls(decoded)

    @property
    def data(self) -> bytes:
        return bytes(self._data)

    @property
    def use_environment_var(self) -> bool:
        return bool(self._data[0] & _ENV_VAR_FLAG)

    def strategy(self) -> Strategy:
        """The strategy stored in the identifier; ValueError if it is unknown."""
        bits = self._data[1] >> 5
        try:
            return Strategy(bits)
        except ValueError:
            raise ValueError(f"unknown identification strategy {bits}") from None

    def set_strategy(self, strategy: Strategy) -> None:
        strategy = Strategy(strategy)
        if strategy in (Strategy.NONE, Strategy.DEFAULT):
            raise ValueError("Only known strategies are permitted")
        self._data[1] = (self._data[1] & _LOW_BITS) | ((int(strategy) << 5) & 0xFF)

    def set_use_environment_var(self, use_env_var: bool) -> None:
        if use_env_var:
            self._data[0] |= _ENV_VAR_FLAG
        else:
            self._data[0] &= ~_ENV_VAR_FLAG & 0xFF

    def set_data(self, data: bytes) -> None:
        """Store the strategy data, keeping the strategy bits."""
        raw = bytes(data)
        if len(raw) != PROPRIETARY_DATA_SIZE:
            raise ValueError(f"strategy data needs {PROPRIETARY_DATA_SIZE} bytes, got {len(raw)}")
        self._data[1] = (self._data[1] & ~_LOW_BITS & 0xFF) | (raw[0] & _LOW_BITS)
        self._data[2:] = raw[1:]

    def data_match(self, data: bytes) -> bool:
        """Whether the strategy data equals ``data`` (first byte: low five bits only)."""
        raw = bytes(data)
        if len(raw) != PROPRIETARY_DATA_SIZE:
            return False
        return (raw[0] & _LOW_BITS) == (self._data[1] & _LOW_BITS) and raw[1:] == bytes(self._data[2:])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HwIdentifier):
            return NotImplemented
        return (
            self._data[1] >> 5 == other._data[1] >> 5
            and self._data[1] & _LOW_BITS == other._data[1] & _LOW_BITS
            and self._data[2:] == other._data[2:]
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        printed = b64.encode(bytes(self._data), 5).replace("\n", "-")
        return printed[:-1]

    def __repr__(self) -> str:
        return f"HwIdentifier({str(self)!r})"