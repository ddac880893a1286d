"""Playback completion thresholds."""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Optional

from domain.models import as_number

logger = logging.getLogger(__name__)


def validate_thresholds(thresholds: Iterable[Any]) -> tuple[int, ...]:
    """Return *thresholds* as a tuple, raising ValueError unless they are
    strictly ascending integers in (0, 100]."""
    values = tuple(thresholds)
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"completion threshold must be an int, got {value!r}")
        if not 0 < value <= 100:
            raise ValueError(f"completion threshold out of range (0, 100]: {value}")
    if any(b <= a for a, b in zip(values, values[1:])):
        raise ValueError(f"completion thresholds must be ascending: {list(values)}")
    return values


class PercentageTracker:
    """Notifies each completion threshold once per forward crossing.

    ``update`` returns the threshold to notify, or None.  Moving back below
    the last notified threshold re-arms every threshold above the new
    position; landing exactly on a threshold notifies it.
    """

    def __init__(self, thresholds: Iterable[int] = ()) -> None:
        self.thresholds = validate_thresholds(thresholds)
        self._last_fired: Optional[int] = None

    @property
    def last_fired(self) -> Optional[int]:
        return self._last_fired

    def reset(self) -> None:
        self._last_fired = None

    def update(self, current: Any, duration: Any) -> Optional[int]:
        position = as_number(current)
        total = as_number(duration)
        if position is None or total is None or total <= 0 or not self.thresholds:
            return None

        ratio = position / total * 100
        if not math.isfinite(ratio):
            return None
        percentage = math.floor(ratio)

        if self._last_fired is not None and percentage < self._last_fired:
            below = [t for t in self.thresholds if t < percentage]
            self._last_fired = below[-1] if below else None
            logger.debug("Backward move to %d%%; re-armed above %s", percentage, self._last_fired)

        candidate: Optional[int] = None
        for threshold in self.thresholds:
            if threshold > percentage:
                break
            if self._last_fired is None or threshold > self._last_fired:
                candidate = threshold

        if candidate is None:
            return None
        self._last_fired = candidate
        return candidate
