from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any
from zoneinfo import ZoneInfo

# Timezones
UTC = ZoneInfo("UTC")


@dataclass
class WeatherReportResult:
    """
    Normalized upstream report.
    `raw_text` carries either the bulletin or a localized placeholder,
    never an error the caller has to branch on.
    """
    raw_text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"raw_text": self.raw_text}


@dataclass
class MetarReport(WeatherReportResult):
    observation_time: Optional[str] = None  # TG-FTP header line, e.g. "2024/01/12 21:00"

    def to_dict(self) -> Dict[str, Any]:
        return {"raw_text": self.raw_text, "observation_time": self.observation_time}


@dataclass
class TafReport(WeatherReportResult):
    issue_time: Optional[str] = None  # Not extracted yet, always None

    def to_dict(self) -> Dict[str, Any]:
        return {"raw_text": self.raw_text, "issue_time": self.issue_time}


class SkyCover(str, Enum):
    FEW = "FEW"
    SCT = "SCT"
    BKN = "BKN"
    OVC = "OVC"


@dataclass
class SkyLayer:
    sky_cover: SkyCover
    cloud_base_ft_agl: int

    def to_dict(self) -> Dict[str, Any]:
        return {"sky_cover": self.sky_cover.value, "cloud_base_ft_agl": self.cloud_base_ft_agl}


@dataclass
class ParsedMetar:
    """
    Fields decoded from a raw METAR line.
    Each field is independent: a missing group leaves only that field empty.
    """
    raw_text: Optional[str] = None
    observation_time: Optional[str] = None
    wind_dir_degrees: Optional[int] = None   # None when VRB or unparseable
    wind_speed_kt: Optional[int] = None
    visibility_statute_mi: Optional[float] = None
    temp_c: Optional[int] = None
    dewpoint_c: Optional[int] = None
    altim_in_hg: Optional[str] = None        # "29.92"
    sky_condition: List[SkyLayer] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "raw_text": self.raw_text,
            "observation_time": self.observation_time,
            "wind_dir_degrees": self.wind_dir_degrees,
            "wind_speed_kt": self.wind_speed_kt,
            "visibility_statute_mi": self.visibility_statute_mi,
            "temp_c": self.temp_c,
            "dewpoint_c": self.dewpoint_c,
            "altim_in_hg": self.altim_in_hg,
            "sky_condition": [layer.to_dict() for layer in self.sky_condition],
        }


@dataclass
class Pirep:
    """Pilot report as shown in the PIREP card."""
    receive_time: datetime
    raw_text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"receive_time": self.receive_time.isoformat(), "raw_text": self.raw_text}


@dataclass
class RotationState:
    """Indices into the station and slide lists. Both wrap modulo their length."""
    station_index: int = 0
    slide_index: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"station_index": self.station_index, "slide_index": self.slide_index}
