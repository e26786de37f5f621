from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Set
import logging

from .models import ParsedMetar, Pirep, TafReport, UTC

logger = logging.getLogger("display_state")


def format_observation_time(raw: Optional[str]) -> str:
    """TG-FTP header ("2024/01/12 21:00", UTC) -> ISO string; raw text if unparseable."""
    if not raw:
        return "--"
    try:
        dt = datetime.strptime(raw.strip(), "%Y/%m/%d %H:%M").replace(tzinfo=UTC)
    except ValueError:
        return raw
    return dt.isoformat()


@dataclass
class DisplayState:
    """
    What the lobby screen currently shows.

    A refresh batch (METAR + TAF + PIREPs for one station) is applied as a
    whole. Each refresh carries a generation number and a batch older than
    the last applied one is dropped, so a slow response for a previous
    station cannot overwrite a newer station.
    """
    station: Optional[str] = None
    metar: Optional[ParsedMetar] = None
    taf: Optional[TafReport] = None
    pireps: List[Pirep] = field(default_factory=list)
    error: Optional[str] = None
    applied_generation: int = 0
    updated_at_utc: Optional[datetime] = None
    _in_flight: Set[int] = field(default_factory=set, init=False, repr=False)

    @property
    def loading(self) -> bool:
        return bool(self._in_flight)

    def begin_refresh(self, generation: int) -> None:
        self._in_flight.add(generation)
        self.error = None

    def end_refresh(self, generation: int) -> None:
        self._in_flight.discard(generation)

    def apply(
        self,
        generation: int,
        station: str,
        metar: ParsedMetar,
        taf: TafReport,
        pireps: List[Pirep],
    ) -> bool:
        """Apply one refresh batch. Returns False when the batch is stale."""
        if generation <= self.applied_generation:
            logger.info(
                f"Dropping stale batch for {station} (generation {generation} <= {self.applied_generation})"
            )
            return False
        self.station = station
        self.metar = metar
        self.taf = taf
        self.pireps = list(pireps)
        self.applied_generation = generation
        self.updated_at_utc = datetime.now(UTC)
        return True

    def fail(self, generation: int, message: str) -> None:
        # Previous data stays on screen, only the banner changes.
        if generation >= self.applied_generation:
            self.error = message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "station": self.station,
            "metar": self.metar.to_dict() if self.metar else None,
            "taf": self.taf.to_dict() if self.taf else None,
            "pireps": [p.to_dict() for p in self.pireps],
            "loading": self.loading,
            "error": self.error,
            "observation_time_display": format_observation_time(
                self.metar.observation_time if self.metar else None
            ),
            "generation": self.applied_generation,
            "updated_at_utc": self.updated_at_utc.isoformat() if self.updated_at_utc else None,
        }
