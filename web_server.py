# Load environment variables FIRST (before any other imports)
from __future__ import annotations

from dotenv import load_dotenv
load_dotenv()

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

# Silence verbose loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logger = logging.getLogger("web_server")

from config import (
    CIRCUITS_URL,
    DISPLAY_LOCALE,
    PORT,
    ROTATION_ENABLED,
    SLIDE_ROTATION_SECONDS,
    SLIDES,
    STATION_ROTATION_SECONDS,
    get_active_stations,
    get_rotation_stations,
)
from collector import (
    MetarNormalizer,
    TafNormalizer,
    UpstreamFetcher,
    collect_station_reports,
    fetch_pireps,
    validate_station,
)
from core.rotation import RotationScheduler

app = FastAPI(title="AviWx Lobby Weather Proxy")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Response models
class MetarPayload(BaseModel):
    raw_text: Optional[str] = None
    observation_time: Optional[str] = None


class TafPayload(BaseModel):
    raw_text: Optional[str] = None
    issue_time: Optional[str] = None


class PirepPayload(BaseModel):
    receive_time: str
    raw_text: str


class ErrorPayload(BaseModel):
    error: str


_fetcher: Optional[UpstreamFetcher] = None
_scheduler: Optional[RotationScheduler] = None


def get_fetcher() -> UpstreamFetcher:
    global _fetcher
    if _fetcher is None:
        _fetcher = UpstreamFetcher()
    return _fetcher


def _invalid_station() -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid station"})


# -----------------------------
# METAR / LWIS
# -----------------------------
@app.get("/metar", response_model=MetarPayload, responses={400: {"model": ErrorPayload}})
async def get_metar(station: Optional[str] = None):
    """Raw METAR for a station. Upstream failures come back as 200 with a placeholder."""
    code = validate_station(station)
    if not code:
        return _invalid_station()
    report = await MetarNormalizer(get_fetcher(), lang=DISPLAY_LOCALE).get_report(code)
    return report.to_dict()


# -----------------------------
# TAF
# -----------------------------
@app.get("/taf", response_model=TafPayload, responses={400: {"model": ErrorPayload}})
async def get_taf(station: Optional[str] = None):
    """Raw TAF for a station. A 404 upstream means no TAF is issued there."""
    code = validate_station(station)
    if not code:
        return _invalid_station()
    report = await TafNormalizer(get_fetcher(), lang=DISPLAY_LOCALE).get_report(code)
    return report.to_dict()


# -----------------------------
# PIREPs (demo)
# -----------------------------
@app.get("/pireps", response_model=List[PirepPayload], responses={400: {"model": ErrorPayload}})
async def get_pireps(station: Optional[str] = None):
    code = validate_station(station)
    if not code:
        return _invalid_station()
    pireps = await fetch_pireps(code, lang=DISPLAY_LOCALE)
    return [p.to_dict() for p in pireps]


# -----------------------------
# Lobby display
# -----------------------------
@app.get("/api/stations")
def get_stations():
    """Rotation configuration for the lobby client."""
    active = get_active_stations()
    stations: List[Dict[str, Any]] = [
        {"id": sid, "name": stn.name, "metar_surrogate": stn.metar_surrogate}
        for sid, stn in active.items()
    ]
    return {
        "stations": stations,
        "slides": list(SLIDES),
        "station_rotation_seconds": STATION_ROTATION_SECONDS,
        "slide_rotation_seconds": SLIDE_ROTATION_SECONDS,
        "circuits_url": CIRCUITS_URL,
    }


@app.get("/api/display")
def get_display():
    """Current rotation position and the last applied weather batch."""
    if _scheduler is None:
        return JSONResponse(status_code=503, content={"error": "Rotation not running"})
    return _scheduler.snapshot()


@app.on_event("startup")
async def startup_event():
    """Start the station/slide rotation."""
    global _scheduler
    if not ROTATION_ENABLED:
        logger.info("Rotation disabled (ROTATION_ENABLED=false)")
        return
    fetcher = get_fetcher()

    async def _load_station(station_id: str) -> Dict[str, Any]:
        return await collect_station_reports(station_id, fetcher)

    _scheduler = RotationScheduler(
        stations=get_rotation_stations(),
        slides=SLIDES,
        load_station=_load_station,
        station_period_s=STATION_ROTATION_SECONDS,
        slide_period_s=SLIDE_ROTATION_SECONDS,
        lang=DISPLAY_LOCALE,
    )
    _scheduler.start()


@app.on_event("shutdown")
async def shutdown_event():
    global _scheduler, _fetcher
    if _scheduler is not None:
        await _scheduler.stop()
        _scheduler = None
    if _fetcher is not None:
        await _fetcher.aclose()
        _fetcher = None


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    logger.info(f"Weather proxy running at http://localhost:{PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
