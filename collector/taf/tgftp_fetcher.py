"""
AviWx Lobby - TAF from TG-FTP (Text) Source
URL: {base}/forecasts/taf/stations/{station_id}.TXT
"""

from __future__ import annotations

import logging

from config import TAF_URL_TEMPLATE
from collector.report_normalizer import ReportNormalizer
from collector.station_code import StationCode
from core.i18n import t
from core.models import TafReport


class TafNormalizer(ReportNormalizer):
    """TAF flavour: raw body passthrough, 404 means no forecast issued."""

    report_kind = "TAF"
    url_template = TAF_URL_TEMPLATE
    logger = logging.getLogger("taf_tgftp")

    def server_error(self) -> TafReport:
        return TafReport(raw_text=t("taf_server_error", self.lang), issue_time=None)

    def http_error(self, station: StationCode, status_code: int) -> TafReport:
        return TafReport(
            raw_text=t("taf_http_error", self.lang, status=status_code, station=station),
            issue_time=None,
        )

    def not_found(self, station: StationCode) -> TafReport:
        return TafReport(raw_text=t("taf_not_available", self.lang, station=station), issue_time=None)

    def from_body(self, text: str) -> TafReport:
        # Whole body, header line included; issue_time is not extracted.
        return TafReport(raw_text=text.strip(), issue_time=None)

