"""
AviWx Lobby - Rotation Scheduler

Two independent periodic counters drive the lobby screen:
- the station timer advances through the station list and refreshes
  METAR/TAF/PIREPs for the new station;
- the slide timer advances through the slide list and never touches the network.

Time comes from an injected clock so tests can run on virtual time.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from .display import DisplayState
from .i18n import t
from .models import RotationState

logger = logging.getLogger("rotation")

StationLoader = Callable[[str], Awaitable[Dict[str, Any]]]


class MonotonicClock:
    """Wall-clock time source for production."""

    def now(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class ManualClock:
    """
    Virtual clock. Time only moves when `advance()` is awaited; sleepers
    wake in deadline order with `now()` set to their deadline.

    After each wakeup the loop is yielded to `settle_iterations` times so
    woken tasks can run until they block again. A task that needs more
    bare `await asyncio.sleep(0)` hops than that between clock sleeps is
    not finished when `advance()` returns; raise `settle_iterations` for
    such loaders.
    """

    def __init__(self, start: float = 0.0, settle_iterations: int = 20):
        if settle_iterations <= 0:
            raise ValueError("settle_iterations must be positive")
        self._now = float(start)
        self._sleepers: List[tuple] = []
        self._seq = itertools.count()
        self.settle_iterations = settle_iterations

    def now(self) -> float:
        return self._now

    async def sleep(self, seconds: float) -> None:
        if seconds <= 0:
            await asyncio.sleep(0)
            return
        future = asyncio.get_running_loop().create_future()
        heapq.heappush(self._sleepers, (self._now + seconds, next(self._seq), future))
        await future

    async def _settle(self) -> None:
        for _ in range(self.settle_iterations):
            await asyncio.sleep(0)

    async def advance(self, seconds: float) -> None:
        target = self._now + seconds
        await self._settle()
        while self._sleepers and self._sleepers[0][0] <= target:
            deadline, _, future = heapq.heappop(self._sleepers)
            if future.done():
                continue
            self._now = max(self._now, deadline)
            future.set_result(None)
            await self._settle()
        self._now = target
        await self._settle()


class RotationScheduler:
    """
    Owns RotationState and DisplayState for the single lobby display.

    start() refreshes station 0 immediately then starts both timers;
    stop() cancels the timers and in-flight refreshes together.
    """

    def __init__(
        self,
        stations: Sequence[str],
        slides: Sequence[str],
        load_station: StationLoader,
        station_period_s: float,
        slide_period_s: float,
        clock: Optional[Any] = None,
        display: Optional[DisplayState] = None,
        lang: str = "",
    ):
        if not stations:
            raise ValueError("Rotation needs at least one station")
        if not slides:
            raise ValueError("Rotation needs at least one slide")
        if station_period_s <= 0 or slide_period_s <= 0:
            raise ValueError("Rotation periods must be positive")

        self.stations = list(stations)
        self.slides = list(slides)
        self.station_period_s = float(station_period_s)
        self.slide_period_s = float(slide_period_s)
        self.clock = clock or MonotonicClock()
        self.display = display or DisplayState()
        self.state = RotationState()
        self.lang = lang

        self._load_station = load_station
        self._generation = 0
        self._timer_tasks: List[asyncio.Task] = []
        self._refresh_tasks: set = set()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def current_station(self) -> str:
        return self.stations[self.state.station_index]

    @property
    def current_slide(self) -> str:
        return self.slides[self.state.slide_index]

    @property
    def is_running(self) -> bool:
        return bool(self._timer_tasks)

    # ------------------------------------------------------------------
    # Ticks
    # ------------------------------------------------------------------

    def advance_station(self) -> asyncio.Task:
        """Station tick: move to the next station and refresh it."""
        self.state.station_index = (self.state.station_index + 1) % len(self.stations)
        return self.refresh_current()

    def advance_slide(self) -> int:
        """Slide tick: move to the next slide. No I/O."""
        self.state.slide_index = (self.state.slide_index + 1) % len(self.slides)
        return self.state.slide_index

    def refresh_current(self) -> asyncio.Task:
        """Fire a refresh for the current station without waiting for it."""
        self._generation += 1
        task = asyncio.create_task(self._refresh(self._generation, self.current_station))
        self._refresh_tasks.add(task)
        task.add_done_callback(self._refresh_tasks.discard)
        return task

    async def _refresh(self, generation: int, station_id: str) -> None:
        self.display.begin_refresh(generation)
        try:
            data = await self._load_station(station_id)
            self.display.apply(
                generation,
                station_id,
                metar=data["metar"],
                taf=data["taf"],
                pireps=data["pireps"],
            )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Refresh failed for {station_id}: {e}")
            self.display.fail(generation, t("load_error", self.lang))
        finally:
            self.display.end_refresh(generation)

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    async def _run_periodic(
        self, name: str, period_s: float, tick: Callable[[], Any], started_at: float
    ) -> None:
        # Deadlines are start + k * period, so late wakeups do not accumulate.
        k = 0
        while True:
            k += 1
            next_at = started_at + k * period_s
            now = self.clock.now()
            if now - next_at >= period_s:
                missed = int((now - next_at) // period_s)
                logger.warning(f"{name} timer fell behind, skipping {missed} tick(s)")
                k += missed
                next_at = started_at + k * period_s
            delay = next_at - now
            if delay > 0:
                await self.clock.sleep(delay)
            try:
                tick()
            except Exception as e:
                logger.error(f"{name} tick error: {e}")

    def start(self) -> None:
        """Start rotating. Must be called from a running event loop."""
        if self.is_running:
            return
        logger.info(
            f"Starting rotation: {len(self.stations)} stations every {self.station_period_s:g}s, "
            f"{len(self.slides)} slides every {self.slide_period_s:g}s"
        )
        started_at = self.clock.now()
        self.refresh_current()
        self._timer_tasks = [
            asyncio.create_task(
                self._run_periodic("station", self.station_period_s, self.advance_station, started_at)
            ),
            asyncio.create_task(
                self._run_periodic("slide", self.slide_period_s, self.advance_slide, started_at)
            ),
        ]

    async def stop(self) -> None:
        tasks = self._timer_tasks + list(self._refresh_tasks)
        self._timer_tasks = []
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Rotation stopped")

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def snapshot(self) -> Dict[str, Any]:
        slide = self.current_slide
        return {
            "rotation": self.state.to_dict(),
            "current_station": self.current_station,
            "current_slide": slide,
            "slide_label": t(f"slide_{slide}", self.lang),
            "stations": list(self.stations),
            "display": self.display.to_dict(),
        }
