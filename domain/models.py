"""Core data models for the playback stats aggregator."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

# Stands in for a metric the playback engine cannot currently report.
UNAVAILABLE = "*"

Extra = Union[int, float, str]

COUNTER_NAMES: tuple[str, ...] = (
    "play",
    "pause",
    "seek",
    "buffering",
    "error",
    "fullscreen",
    "changeLevel",
    "dvrUsage",
)
TIMER_NAMES: tuple[str, ...] = ("startup", "watch", "session")
EXTRA_KEYS: tuple[str, ...] = ("duration", "buffersize", "bufferingPercentage")


class EventKind(str, Enum):
    PLAY = "play"
    PLAYING = "playing"
    PAUSE = "pause"
    STOP = "stop"
    ENDED = "ended"
    ERROR = "error"
    BUFFERING_START = "buffering"
    BUFFERING_END = "bufferfull"
    SEEK = "seek"
    FULLSCREEN = "fullscreen"
    LEVEL_CHANGE = "levelchange"
    TIME_UPDATE = "timeupdate"
    PROGRESS = "progress"
    DURATION = "durationchange"

    @classmethod
    def parse(cls, name: Any) -> Optional["EventKind"]:
        """Return the matching kind, or None for anything unrecognised."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except (TypeError, ValueError):
            return None


class WatchState(str, Enum):
    IDLE = "IDLE"
    ACCUMULATING = "ACCUMULATING"


@dataclass(frozen=True)
class Report:
    """Immutable point-in-time copy of the metrics store."""

    counters: Mapping[str, int]
    timers: Mapping[str, int]
    extra: Mapping[str, Extra]

    @classmethod
    def build(
        cls,
        counters: Mapping[str, int],
        timers: Mapping[str, int],
        extra: Mapping[str, Extra],
    ) -> "Report":
        return cls(
            counters=MappingProxyType(dict(counters)),
            timers=MappingProxyType(dict(timers)),
            extra=MappingProxyType(dict(extra)),
        )

    def with_extra(self, key: str, value: Extra) -> "Report":
        extra = dict(self.extra)
        extra[key] = value
        return Report.build(self.counters, self.timers, extra)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {
            "counters": dict(self.counters),
            "timers": dict(self.timers),
            "extra": dict(self.extra),
        }


def as_number(value: Any) -> Optional[float]:
    """Return *value* as a finite float, or None if it is not one."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        if not math.isfinite(value):
            return None
    except OverflowError:  # int too large for a float
        return None
    return float(value)
