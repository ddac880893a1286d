"""Counters, elapsed-time timers and extra fields for one player session."""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Optional

from domain.models import (
    COUNTER_NAMES,
    EXTRA_KEYS,
    TIMER_NAMES,
    UNAVAILABLE,
    Extra,
    Report,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class MetricsStore:
    """Mutation helpers never raise: unknown names are ignored so a stray
    event cannot take down the host session.

    *clock* returns monotonic milliseconds.  Each timer accumulates closed
    windows; an open window is counted up to "now" in snapshots without
    being closed.
    """

    def __init__(
        self,
        counters: Iterable[str] = COUNTER_NAMES,
        clock: Clock = monotonic_ms,
    ) -> None:
        self._clock = clock
        self._counters: dict[str, int] = {name: 0 for name in counters}
        self._timers: dict[str, float] = {name: 0.0 for name in TIMER_NAMES}
        self._extra: dict[str, Extra] = {key: UNAVAILABLE for key in EXTRA_KEYS}
        self._open: dict[str, float] = {}  # timer name -> window start

    # ------------------------------------------------------------------
    # Counters
    # ------------------------------------------------------------------

    def increment(self, name: str) -> None:
        if name not in self._counters:
            logger.debug("Ignoring unknown counter %r", name)
            return
        self._counters[name] += 1

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def start_timer(self, name: str) -> None:
        if name not in self._timers:
            logger.debug("Ignoring unknown timer %r", name)
            return
        if name in self._open:
            return
        self._open[name] = self._clock()

    def stop_timer(self, name: str) -> None:
        started = self._open.pop(name, None)
        if started is None:
            return
        self._timers[name] += max(0.0, self._clock() - started)

    def is_running(self, name: str) -> bool:
        return name in self._open

    def abandon_timers(self) -> None:
        """Drop every open window without adding its elapsed time."""
        if self._open:
            logger.debug("Abandoning open timers: %s", ", ".join(self._open))
        self._open.clear()

    # ------------------------------------------------------------------
    # Extra fields
    # ------------------------------------------------------------------

    def set_extra(self, key: str, value: Extra) -> None:
        if key not in self._extra:
            logger.debug("Ignoring unknown extra field %r", key)
            return
        self._extra[key] = value

    def get_extra(self, key: str) -> Optional[Extra]:
        return self._extra.get(key)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def snapshot(self) -> Report:
        now = self._clock() if self._open else 0.0
        timers = {}
        for name, total in self._timers.items():
            started = self._open.get(name)
            if started is not None:
                total += max(0.0, now - started)
            timers[name] = int(round(total))
        return Report.build(self._counters, timers, self._extra)
