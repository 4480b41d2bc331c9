"""
Owner of the single active location.

Each acquisition takes a generation token from ``begin()``; only the holder
of the newest token may commit, so a slow acquisition that finishes after a
newer one started is dropped (last write wins). Commits swap the whole
context in one assignment, never field by field.
"""

import logging
import threading
from typing import Optional

from flood_engine.models import LocationContext, RiskAssessment

logger = logging.getLogger(__name__)


class ActiveLocationTracker:
    def __init__(self):
        self._lock = threading.Lock()
        self._generation = 0
        self._context: Optional[LocationContext] = None

    @property
    def current(self) -> Optional[LocationContext]:
        return self._context

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self) -> int:
        """Starts a new acquisition and discards the previous context."""
        with self._lock:
            self._generation += 1
            self._context = None
            return self._generation

    def commit(self, token: int, context: LocationContext) -> bool:
        with self._lock:
            if token != self._generation:
                logger.info(f"Dropping stale acquisition #{token} (active is #{self._generation})")
                return False
            self._context = context
            return True

    def record_risk(self, context: LocationContext, risk: RiskAssessment) -> bool:
        """Replaces the latest risk, unless the context was superseded meanwhile."""
        with self._lock:
            if self._context is not context:
                logger.info("Discarding risk result for a superseded location")
                return False
            context.risk = risk
            return True

    def reset(self) -> None:
        with self._lock:
            self._generation += 1
            self._context = None
