"""
AviWx Lobby - Configuration
Central configuration for rotation stations, slides and upstream endpoints.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
import os


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}


# ============================================================================
# STATION CONFIGURATION
# ============================================================================

@dataclass
class StationConfig:
    """Lobby station with display metadata."""
    icao_id: str
    name: str
    metar_surrogate: Optional[str] = None  # Station queried upstream when this one has no METAR
    enabled: bool = True


# Rotation order follows insertion order.
STATIONS: Dict[str, StationConfig] = {
    "CYJN": StationConfig(
        icao_id="CYJN",
        name="Saint-Jean-sur-Richelieu",
        metar_surrogate="CWIZ",  # No METAR at CYJN; L'Acadie LWIS is the nearest
    ),
    "CYHU": StationConfig(
        icao_id="CYHU",
        name="Montreal Saint-Hubert",
    ),
    "CYUL": StationConfig(
        icao_id="CYUL",
        name="Montreal Trudeau",
    ),
    "CYMX": StationConfig(
        icao_id="CYMX",
        name="Montreal Mirabel",
    ),
}


def get_active_stations() -> Dict[str, StationConfig]:
    """Return only enabled stations."""
    return {k: v for k, v in STATIONS.items() if v.enabled}


def get_rotation_stations() -> List[str]:
    """Station codes cycled by the lobby display, in rotation order."""
    return list(get_active_stations().keys())


def get_metar_aliases() -> Dict[str, str]:
    """Map of station code -> surrogate code used for the upstream METAR request."""
    return {k: v.metar_surrogate for k, v in STATIONS.items() if v.metar_surrogate}

# ============================================================================
# UPSTREAM (NOAA TG-FTP)
# ============================================================================

WX_UPSTREAM_BASE_URL = os.environ.get("WX_UPSTREAM_BASE_URL", "https://tgftp.nws.noaa.gov/data").rstrip("/")

METAR_URL_TEMPLATE = "{base}/observations/metar/stations/{station}.TXT"
TAF_URL_TEMPLATE = "{base}/forecasts/taf/stations/{station}.TXT"

# TG-FTP rejects or throttles anonymous clients
USER_AGENT = "Mozilla/5.0 (SkynovaLobby/1.0)"

UPSTREAM_TIMEOUT_SECONDS = _env_float("UPSTREAM_TIMEOUT_SECONDS", 10.0)

# ============================================================================
# ROTATION CONFIGURATION
# ============================================================================

# 30 seconds per airport
STATION_ROTATION_SECONDS = _env_float("STATION_ROTATION_SECONDS", 30.0)

# Weather slide x4 = 120 s, circuits slide = 30 s, 150 s per loop
SLIDE_ROTATION_SECONDS = _env_float("SLIDE_ROTATION_SECONDS", 30.0)

SLIDE_WEATHER = "weather"
SLIDE_CIRCUITS = "circuits"
SLIDES: List[str] = [SLIDE_WEATHER, SLIDE_WEATHER, SLIDE_WEATHER, SLIDE_WEATHER, SLIDE_CIRCUITS]

CIRCUITS_URL = os.environ.get("CIRCUITS_URL", "https://yjn-circuits.netlify.app/?lang=fr")

ROTATION_ENABLED = _env_bool("ROTATION_ENABLED", True)

# ============================================================================
# SERVER / DISPLAY
# ============================================================================

PORT = int(_env_float("PORT", 5055))

# "fr" or "en"
DISPLAY_LOCALE = os.environ.get("DISPLAY_LOCALE", "fr").strip().lower() or "fr"
