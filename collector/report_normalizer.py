"""
AviWx Lobby - Report Normalizer
Shared fetch-and-normalize flow for TG-FTP text bulletins.

Every path returns a report object. Upstream outages become a localized
placeholder in `raw_text` so the lobby never shows an error screen.
"""

from __future__ import annotations

import logging
from typing import Optional

from config import WX_UPSTREAM_BASE_URL
from collector.exceptions import UpstreamHttpFailure, UpstreamTransportFailure
from collector.station_code import StationCode, validate_station
from collector.upstream import UpstreamFetcher, UpstreamResponse
from core.models import WeatherReportResult


class ReportNormalizer:
    """Base class; subclasses define the URL template and the payload shape."""

    report_kind = "REPORT"
    url_template = "{base}/{station}.TXT"
    logger = logging.getLogger("report_normalizer")

    def __init__(self, fetcher: UpstreamFetcher, base_url: str = WX_UPSTREAM_BASE_URL, lang: str = ""):
        self.fetcher = fetcher
        self.base_url = base_url.rstrip("/")
        self.lang = lang

    # -- hooks ---------------------------------------------------------------

    def upstream_station(self, station: StationCode) -> str:
        return station

    def build_url(self, upstream_station: str) -> str:
        return self.url_template.format(base=self.base_url, station=upstream_station)

    def server_error(self) -> WeatherReportResult:
        raise NotImplementedError

    def http_error(self, station: StationCode, status_code: int) -> WeatherReportResult:
        raise NotImplementedError

    def not_found(self, station: StationCode) -> Optional[WeatherReportResult]:
        """Specific 404 payload, or None to treat 404 like any other status."""
        return None

    def from_body(self, text: str) -> WeatherReportResult:
        raise NotImplementedError

    # -- flow ----------------------------------------------------------------

    async def get_report(self, station: str) -> WeatherReportResult:
        try:
            code = station if isinstance(station, StationCode) else validate_station(station)
            if code is None:
                self.logger.warning(f"{self.report_kind} requested for invalid station {station!r}")
                return self.server_error()

            upstream = self.upstream_station(code)
            url = self.build_url(upstream)

            try:
                response: UpstreamResponse = await self.fetcher.fetch(url)
            except UpstreamTransportFailure as e:
                self.logger.error(f"{self.report_kind} error: {e}")
                return self.server_error()

            if response.status_code == 404:
                specific = self.not_found(code)
                if specific is not None:
                    return specific

            try:
                response.raise_for_status()
            except UpstreamHttpFailure as e:
                self.logger.error(
                    f"Upstream {self.report_kind} error for {upstream}: {e.status_code} {e.reason}"
                )
                return self.http_error(code, e.status_code)

            return self.from_body(response.text())

        except Exception as e:
            self.logger.exception(f"{self.report_kind} error: {e}")
            return self.server_error()
