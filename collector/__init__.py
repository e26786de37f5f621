"""
AviWx Lobby - Collector Module
Station validation, TG-FTP retrieval and METAR/TAF/PIREP normalization.
"""

import asyncio

from .exceptions import (
    WeatherProxyError,
    InvalidStationCode,
    UpstreamTransportFailure,
    UpstreamHttpFailure,
)
from .station_code import StationCode, validate_station
from .upstream import UpstreamFetcher, UpstreamResponse
from .metar import MetarNormalizer, parse_metar
from .taf import TafNormalizer
from .pirep_fetcher import fetch_pireps

__all__ = [
    "WeatherProxyError", "InvalidStationCode",
    "UpstreamTransportFailure", "UpstreamHttpFailure",
    "StationCode", "validate_station",
    "UpstreamFetcher", "UpstreamResponse",
    "MetarNormalizer", "TafNormalizer", "parse_metar", "fetch_pireps",
    "collect_station_reports",
]


async def collect_station_reports(station_id: str, fetcher: UpstreamFetcher) -> dict:
    """
    Collect METAR, TAF and PIREPs for one station concurrently.

    Returns:
        Dictionary with the parsed METAR, the raw TAF report and the PIREP list
    """
    metar_report, taf_report, pireps = await asyncio.gather(
        MetarNormalizer(fetcher).get_report(station_id),
        TafNormalizer(fetcher).get_report(station_id),
        fetch_pireps(station_id),
    )
    return {
        "station_id": station_id,
        "metar": parse_metar(metar_report.raw_text, metar_report.observation_time),
        "taf": taf_report,
        "pireps": pireps,
    }
