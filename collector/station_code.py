from __future__ import annotations

import re
from typing import Optional

from collector.exceptions import InvalidStationCode

_STATION_RE = re.compile(r"^[A-Z0-9]{3,4}$")


class StationCode(str):
    """ICAO-style station identifier, always matching ^[A-Z0-9]{3,4}$."""

    def __new__(cls, value: str) -> "StationCode":
        if not isinstance(value, str) or not _STATION_RE.fullmatch(value):
            raise InvalidStationCode(value)
        return super().__new__(cls, value)


def validate_station(value: Optional[str]) -> Optional[StationCode]:
    """
    Trim and uppercase a user-supplied station code.
    Returns None when it does not look like a station; callers reject the request.
    """
    if not value:
        return None
    candidate = str(value).strip().upper()
    if not _STATION_RE.fullmatch(candidate):
        return None
    return StationCode(candidate)
