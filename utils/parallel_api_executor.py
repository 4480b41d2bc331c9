"""
PARALLEL API EXECUTOR - location acquisition fan-out
Weather/elevation grid, hydrology scan and reverse geocode run concurrently
and are joined before any derived state is computed. The historical-context
lookup hangs off the geocode result and is NOT part of the join.
"""

import asyncio
import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import aiohttp

from flood_config import HTTP_TIMEOUT_S, MAX_CONCURRENT, USER_AGENT
from flood_engine.assessment import build_location_context
from flood_engine.models import HistoricalEvent, HydrologyFlag, LocationContext, PlaceIdentity
from integrations.geocode_adapter import fetch_place_identity
from integrations.water_adapter import fetch_hydrology_flag
from integrations.weather_adapter import fetch_location_samples
from integrations.wiki_adapter import fetch_historical_context, history_query

logger = logging.getLogger(__name__)

# Shared by every executor: history lookups must outlive the event loop
# that started them (the Flask wrapper closes its loop per request).
_HISTORY_POOL = ThreadPoolExecutor(max_workers=2, thread_name_prefix="flood-history")

HistoryCallback = Callable[[List[HistoricalEvent]], None]


@dataclass
class AcquisitionResult:
    context: LocationContext
    # Best-effort: resolves whenever Wikipedia answers, possibly long after
    # the context was handed to the caller. None when no lookup was started.
    history: Optional[Future] = None


class ParallelAPIExecutor:
    """Execute the provider calls for one location in parallel"""

    def __init__(self, max_concurrent: int = MAX_CONCURRENT, history_pool: Optional[ThreadPoolExecutor] = None):
        self.max_concurrent = max_concurrent
        self.history_pool = history_pool or _HISTORY_POOL
        self.session = None

    async def __aenter__(self):
        connector = aiohttp.TCPConnector(limit=self.max_concurrent)
        timeout = aiohttp.ClientTimeout(total=HTTP_TIMEOUT_S * 3, connect=HTTP_TIMEOUT_S)
        self.session = aiohttp.ClientSession(
            connector=connector,
            timeout=timeout,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()

    async def fetch_location_signals(
        self,
        lat: float,
        lng: float,
        history_sink: Optional[HistoryCallback] = None,
        pending: Optional[Dict[str, Future]] = None,
    ) -> Dict[str, Any]:
        """Fetch samples, hydrology flag and place identity in parallel"""

        api_calls = {
            "samples": self._fetch_samples(lat, lng),
            "hydrology": self._fetch_hydrology(lat, lng),
            "place": self._fetch_place(lat, lng, history_sink, pending),
        }

        start_time = time.time()
        results = await asyncio.gather(*api_calls.values(), return_exceptions=True)

        signals = {}
        for key, result in zip(api_calls.keys(), results):
            if isinstance(result, Exception):
                logger.warning(f"API call failed for {key}: {result}")
                signals[key] = self._get_fallback(key)
            else:
                signals[key] = result

        elapsed = time.time() - start_time
        logger.info(f"Parallel API execution completed in {elapsed:.2f} seconds")
        return signals

    async def acquire(
        self,
        lat: float,
        lng: float,
        on_history: Optional[HistoryCallback] = None,
        issued_at: Optional[datetime] = None,
    ) -> AcquisitionResult:
        """
        Full acquisition for one coordinate: always fresh, never raises.

        Historical events land in ``context.historical_events`` whenever the
        lookup completes, before or after this coroutine returns; ``on_history``
        is called afterwards if given.
        """
        events: List[HistoricalEvent] = []
        pending: Dict[str, Future] = {}

        def sink(found: List[HistoricalEvent]) -> None:
            events.extend(found)
            if on_history is not None:
                on_history(found)

        signals = await self.fetch_location_signals(lat, lng, history_sink=sink, pending=pending)

        context = build_location_context(
            latitude=lat,
            longitude=lng,
            samples=signals["samples"],
            hydrology=signals["hydrology"],
            place=signals["place"],
            issued_at=issued_at or datetime.now(),
        )
        # Same list object the sink writes to.
        context.historical_events = events
        return AcquisitionResult(context, pending.get("history"))

    # Individual provider calls
    async def _fetch_samples(self, lat: float, lng: float):
        return await fetch_location_samples(self.session, lat, lng)

    async def _fetch_hydrology(self, lat: float, lng: float):
        return await fetch_hydrology_flag(self.session, lat, lng)

    async def _fetch_place(
        self,
        lat: float,
        lng: float,
        history_sink: Optional[HistoryCallback] = None,
        pending: Optional[Dict[str, Future]] = None,
    ):
        place = await fetch_place_identity(self.session, lat, lng)
        if history_sink is not None and place.is_known:
            future = self._start_history(place, history_sink)
            if pending is not None:
                pending["history"] = future
        return place

    def _start_history(self, place: PlaceIdentity, sink: HistoryCallback) -> Future:
        query = history_query(place)

        def _lookup_and_deliver() -> List[HistoricalEvent]:
            try:
                found = fetch_historical_context(query)
                sink(found)
            except Exception as e:
                logger.warning(f"Historical context lookup failed for '{query}': {e}")
                return []
            logger.debug(f"Historical context for '{query}': {len(found)} events")
            return found

        # The future resolves only after the sink has run.
        return self.history_pool.submit(_lookup_and_deliver)

    def _get_fallback(self, key: str) -> Any:
        """Fallback value for failed provider calls"""
        fallbacks = {
            "samples": None,
            "hydrology": HydrologyFlag.UNRESOLVED,
            "place": PlaceIdentity(),
        }
        return fallbacks.get(key)
