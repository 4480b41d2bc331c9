"""
FAST ANALYSIS INTEGRATOR - sync entry points for the Flask layer
"""

import asyncio
import time
from typing import Callable, Optional, TypeVar

from flood_config import SCORING_MIN_LATENCY_S
from utils.parallel_api_executor import AcquisitionResult, HistoryCallback, ParallelAPIExecutor

T = TypeVar("T")


async def acquire_location_fast(lat: float, lng: float, on_history: Optional[HistoryCallback] = None) -> AcquisitionResult:
    async with ParallelAPIExecutor() as executor:
        return await executor.acquire(lat, lng, on_history=on_history)


def acquire_location_sync(lat: float, lng: float, on_history: Optional[HistoryCallback] = None) -> AcquisitionResult:
    """
    Sync wrapper - just run the async version.
    The historical lookup runs on a thread pool, so it keeps going after
    this loop is closed.
    """
    return asyncio.run(acquire_location_fast(lat, lng, on_history=on_history))


def score_with_min_latency(
    compute: Callable[..., T],
    *args,
    min_latency: Optional[float] = None,
    **kwargs,
) -> T:
    """
    Runs ``compute`` and pads the call to at least ``min_latency`` seconds so
    the client always gets a visible "processing" phase. The result is
    returned unchanged.
    """
    floor = SCORING_MIN_LATENCY_S if min_latency is None else min_latency
    start = time.monotonic()
    result = compute(*args, **kwargs)
    remaining = floor - (time.monotonic() - start)
    if remaining > 0:
        time.sleep(remaining)
    return result
