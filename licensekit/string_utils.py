"""Small string helpers for license handling."""

from __future__ import annotations

import re
import time
from enum import Enum

_WHITESPACE = " \t\n\v\f\r"


class FileFormat(Enum):
    INI = "INI"
    BASE64 = "BASE64"
    UNKNOWN = "UNKNOWN"


def trim(text: str) -> str:
    """Strip whitespace from both ends, and trailing NUL characters too."""
    return text.lstrip(_WHITESPACE).rstrip(_WHITESPACE + "\0")


def _date_pattern(separator: str) -> re.Pattern[str]:
    year = r"\s*([+-]\d{1,3}|\d{1,4})"
    part = r"\s*([+-]\d|\d{1,2})"
    return re.compile(year + re.escape(separator) + part + re.escape(separator) + part)


_COMPACT_DATE = _date_pattern("")
_DASHED_DATE = _date_pattern("-")
_SLASHED_DATE = _date_pattern("/")


def seconds_from_epoch(time_string: str) -> int:
    """Local midnight of a YYYYMMDD, YYYY-MM-DD or YYYY/MM/DD date, as epoch seconds."""
    if len(time_string) == 8:
        match = _COMPACT_DATE.match(time_string)
        if match is None:
            raise ValueError("Date not recognized")
    elif len(time_string) == 10:
        match = _DASHED_DATE.match(time_string) or _SLASHED_DATE.match(time_string)
        if match is None:
            raise ValueError(f"Date [{time_string}] not recognized")
    else:
        raise ValueError(f"Date [{time_string}] not recognized")
    year, month, day = (int(group) for group in match.groups())
    return int(time.mktime((year, month, day, 0, 0, 0, -1, -1, -1)))


def split_string(text: str, separator: str) -> list[str]:
    """Split on ``separator``; a trailing empty segment is dropped."""
    parts = text.split(separator)
    if parts and parts[-1] == "":
        parts.pop()
    return parts


_INI_SECTION = re.compile(r"\[.*?\]")
_BASE64 = re.compile(r"(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?")


def identify_format(text: str) -> FileFormat:
    """Guess whether license text is base64 or an ini document."""
    if _BASE64.fullmatch(text):
        return FileFormat.BASE64
    if _INI_SECTION.search(text):
        return FileFormat.INI
    return FileFormat.UNKNOWN