"""Reading license sections out of ini documents."""

from __future__ import annotations

import configparser
import os
import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Union

from .events import LICENSE_SIGNATURE, LICENSE_VERSION, EventRegistry, EventType
from .file_utils import filter_existing_files, get_file_contents
from .string_utils import trim

SUPPORTED_LICENSE_VERSION = 200
_MAX_LICENSE_SIZE = 1 << 20
_NO_DEFAULT_SECTION = "\x00no-default\x00"
_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")

# A source is either a path to a license file or a (reference, content) pair.
LicenseSource = Union[str, "os.PathLike[str]", "tuple[str, str]"]


@dataclass
class FullLicenseInfo:
    """A license section together with where it came from."""

    source: str
    project: str
    license_signature: str
    magic: int = 0
    limits: dict[str, str] = field(default_factory=dict)

    def print_for_sign(self) -> str:
        """The text the license signature is computed over."""
        parts = [trim(self.project).upper()]
        for key in sorted(self.limits):
            if key != LICENSE_SIGNATURE:
                parts.append(trim(key) + trim(self.limits[key]))
        return "".join(parts)


def _load_ini(content: str) -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        delimiters=("=",),
        comment_prefixes=("#", ";"),
        strict=False,
        interpolation=None,
        default_section=_NO_DEFAULT_SECTION,
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    parser.read_string(content)
    return parser


def _product_section(parser: configparser.ConfigParser, product_up: str) -> dict[str, str]:
    limits: dict[str, str] = {}
    for name in parser.sections():
        if name.upper() == product_up:
            limits.update(parser.items(name))
    return limits


def _lookup(limits: dict[str, str], key: str) -> str | None:
    found = None
    for name, value in limits.items():
        if name.lower() == key.lower():
            found = value
    return found


def _parse_long(value: str | None, default: int = -1) -> int:
    if value is None:
        return default
    match = _LEADING_INTEGER.match(value)
    return int(match.group(1)) if match else default


class LicenseReader:
    """Reads licenses for a product from files or in-memory documents."""

    def __init__(self, sources: Iterable[LicenseSource]):
        self.sources = list(sources)

    def _contents(self, registry: EventRegistry) -> Iterator[tuple[str, str]]:
        for source in self.sources:
            if isinstance(source, tuple):
                reference, content = source
                registry.add_event(EventType.LICENSE_SPECIFIED, reference)
                registry.add_event(EventType.LICENSE_FOUND, reference)
                yield reference, content
                continue
            for path in filter_existing_files([os.fspath(source)], registry):
                try:
                    content = get_file_contents(path, _MAX_LICENSE_SIZE)
                except OSError:
                    registry.add_event(EventType.LICENSE_FILE_NOT_FOUND, path)
                    continue
                yield path, content

    def read_licenses(self, product: str) -> tuple[list[FullLicenseInfo], EventRegistry]:
        """Return the complete licenses for ``product`` and the events met on the way."""
        registry = EventRegistry()
        licenses: list[FullLicenseInfo] = []
        if not self.sources:
            registry.add_event(EventType.LICENSE_FILE_NOT_FOUND)
            registry.turn_warnings_into_errors()
            return licenses, registry

        product_up = product.upper()
        for reference, content in self._contents(registry):
            try:
                parser = _load_ini(content)
            except configparser.Error:
                registry.add_event(EventType.FILE_FORMAT_NOT_RECOGNIZED, reference)
                continue
            limits = _product_section(parser, product_up)
            if not limits:
                registry.add_event(EventType.PRODUCT_NOT_LICENSED, reference)
                continue
            registry.add_event(EventType.PRODUCT_FOUND, reference)
            signature = _lookup(limits, LICENSE_SIGNATURE)
            version = _parse_long(_lookup(limits, LICENSE_VERSION))
            if signature is not None and version == SUPPORTED_LICENSE_VERSION:
                licenses.append(FullLicenseInfo(reference, product, signature, limits=limits))
            else:
                registry.add_event(EventType.LICENSE_MALFORMED, reference)

        if not licenses:
            registry.turn_warnings_into_errors()
        return licenses, registry