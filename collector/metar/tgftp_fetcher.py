"""
AviWx Lobby - METAR from TG-FTP (Text) Source
URL: {base}/observations/metar/stations/{station_id}.TXT
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from config import METAR_URL_TEMPLATE, WX_UPSTREAM_BASE_URL, get_metar_aliases
from collector.report_normalizer import ReportNormalizer
from collector.station_code import StationCode
from collector.upstream import UpstreamFetcher
from core.i18n import t
from core.models import MetarReport


class MetarNormalizer(ReportNormalizer):
    """METAR flavour: surrogate-station aliasing plus header/body split."""

    report_kind = "METAR"
    url_template = METAR_URL_TEMPLATE
    logger = logging.getLogger("metar_tgftp")

    def __init__(
        self,
        fetcher: UpstreamFetcher,
        base_url: str = WX_UPSTREAM_BASE_URL,
        aliases: Optional[Dict[str, str]] = None,
        lang: str = "",
    ):
        super().__init__(fetcher, base_url=base_url, lang=lang)
        self.aliases = dict(get_metar_aliases() if aliases is None else aliases)

    def upstream_station(self, station: StationCode) -> str:
        # Only the upstream URL uses the surrogate; placeholders keep the requested code.
        return self.aliases.get(station, station)

    def server_error(self) -> MetarReport:
        return MetarReport(raw_text=t("metar_server_error", self.lang), observation_time=None)

    def http_error(self, station: StationCode, status_code: int) -> MetarReport:
        return MetarReport(
            raw_text=t("metar_http_error", self.lang, status=status_code, station=station),
            observation_time=None,
        )

    def from_body(self, text: str) -> MetarReport:
        # Format is:
        # 2024/01/12 21:00
        # KATL 122052Z 31008KT 10SM FEW250 09/01 A3012 RMK AO2 SLP198 T00890006
        lines = text.strip().splitlines()
        observation_time = lines[0].strip() if lines and lines[0].strip() else None
        raw_text = " ".join(lines[1:]).strip() or None
        return MetarReport(raw_text=raw_text, observation_time=observation_time)

