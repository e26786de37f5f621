"""
AviWx Lobby - PIREP Fetcher
Static demonstration PIREPs until a real pilot-report source is wired in.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from core.i18n import t
from core.models import Pirep, UTC


_DEMO_PIREP = "CYUL UA /OV CYJN 020010 /FL060 /TP C172 /TB MOD /SK BKN060"


async def fetch_pireps(station_id: str, now: Optional[datetime] = None, lang: str = "") -> List[Pirep]:
    """Return PIREPs near a station (demo data, same report for every station)."""
    receive_time = now or datetime.now(UTC)
    return [
        Pirep(
            receive_time=receive_time,
            raw_text=f"{_DEMO_PIREP} {t('pirep_demo_suffix', lang)}",
        )
    ]
