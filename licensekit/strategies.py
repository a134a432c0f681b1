"""Strategies that compute hardware identifiers from machine information."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable

from .events import EventType
from .hw_identifier import PROPRIETARY_DATA_SIZE, HwIdentifier, Strategy

_FNV_PRIME_32 = 16777619
_FNV_OFFSET_BASIS_32 = 2166136261
_IP_FILLER = 42


class IdentifierUnavailable(LookupError):
    """No hardware identifier can be computed with a strategy."""


@dataclass
class AdapterInfo:
    """A network adapter as reported by the system."""

    id: int = 0
    description: str = ""
    ipv4_address: bytes = bytes(4)
    mac_address: bytes = bytes(8)


@dataclass
class DiskInfo:
    """A disk; ``disk_sn`` and ``label`` are None when not known."""

    id: int = 0
    device: str = ""
    disk_sn: bytes | None = None
    label: str | None = None
    preferred: bool = False


def fnv1a_32(data: str | bytes) -> int:
    """32-bit FNV-1a hash."""
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    value = _FNV_OFFSET_BASIS_32
    for byte in raw:
        value = ((value ^ byte) * _FNV_PRIME_32) & 0xFFFFFFFF
    return value


class IdentificationStrategy(ABC):
    """A way of computing hardware identifiers."""

    @abstractmethod
    def identification_strategy(self) -> Strategy:
        """The strategy this object implements."""

    @abstractmethod
    def alternative_ids(self) -> list[HwIdentifier]:
        """Every identifier this machine can be recognised by."""

    def _identifiers(self, payloads: Iterable[bytes]) -> list[HwIdentifier]:
        identifiers = []
        for payload in payloads:
            identifier = HwIdentifier()
            identifier.set_strategy(self.identification_strategy())
            identifier.set_data(payload)
            identifiers.append(identifier)
        return identifiers

    def generate_pc_id(self) -> HwIdentifier:
        """The preferred identifier; IdentifierUnavailable if there is none."""
        available = self.alternative_ids()
        if not available:
            raise IdentifierUnavailable(
                f"strategy {self.identification_strategy().name} failed"
            )
        return available[0]

    def validate_identifier(self, identifier: HwIdentifier) -> EventType:
        """LICENSE_OK if the identifier belongs to this machine, else IDENTIFIERS_MISMATCH."""
        try:
            strategy = identifier.strategy()
        except ValueError:
            return EventType.IDENTIFIERS_MISMATCH
        if strategy is self.identification_strategy() and any(
            candidate == identifier for candidate in self.alternative_ids()
        ):
            return EventType.LICENSE_OK
        return EventType.IDENTIFIERS_MISMATCH


class EthernetStrategy(IdentificationStrategy):
    """Identifiers from MAC addresses, or from IPv4 addresses when ``use_ip``."""

    def __init__(self, adapters: Iterable[AdapterInfo], use_ip: bool = False):
        self.adapters = list(adapters)
        self.use_ip = use_ip

    def identification_strategy(self) -> Strategy:
        return Strategy.IP_ADDRESS if self.use_ip else Strategy.ETHERNET

    def _payloads(self) -> Iterable[bytes]:
        for adapter in self.adapters:
            address = bytes(adapter.ipv4_address if self.use_ip else adapter.mac_address)
            if not any(address):
                continue
            body = address[: PROPRIETARY_DATA_SIZE - 1]
            body += bytes([_IP_FILLER]) * (PROPRIETARY_DATA_SIZE - 1 - len(body))
            yield b"\x00" + body

    def alternative_ids(self) -> list[HwIdentifier]:
        return self._identifiers(self._payloads())


def _id_by_serial(disk: DiskInfo) -> bytes:
    serial = bytes(disk.disk_sn or b"")[:PROPRIETARY_DATA_SIZE]
    return serial.ljust(PROPRIETARY_DATA_SIZE, b"\x00")


def _id_by_label(disk: DiskInfo) -> bytes:
    label = (disk.label or "").encode("utf-8").split(b"\x00", 1)[0]
    return label[: PROPRIETARY_DATA_SIZE - 1].ljust(PROPRIETARY_DATA_SIZE, b"\x00")


class DiskStrategy(IdentificationStrategy):
    """Identifiers from disk serial numbers and labels, preferred disks first."""

    def __init__(self, disks: Iterable[DiskInfo]):
        self.disks = list(disks)

    def identification_strategy(self) -> Strategy:
        return Strategy.DISK

    def _payloads(self) -> Iterable[bytes]:
        for preferred in (True, False):
            for disk in self.disks:
                if disk.preferred != preferred:
                    continue
                if disk.disk_sn is not None:
                    yield _id_by_serial(disk)
                if disk.label is not None:
                    yield _id_by_label(disk)

    def alternative_ids(self) -> list[HwIdentifier]:
        return self._identifiers(self._payloads())


def _id_by_hashed_serial(serial: str) -> bytes:
    value = fnv1a_32(serial)
    return bytes(
        ((value >> ((index % 4) * 8)) & 0xFF) ^ index for index in range(PROPRIETARY_DATA_SIZE)
    )


class MotherboardDiskStrategy(IdentificationStrategy):
    """Identifiers from hashed motherboard or disk serial numbers."""

    def __init__(self, serial_numbers: Iterable[str]):
        self.serial_numbers = list(serial_numbers)

    def identification_strategy(self) -> Strategy:
        return Strategy.MOTHERBOARD_DISK

    def alternative_ids(self) -> list[HwIdentifier]:
        return self._identifiers(_id_by_hashed_serial(serial) for serial in self.serial_numbers)


__all_dataclasses = (field,)  # keep dataclass helpers importable for callers