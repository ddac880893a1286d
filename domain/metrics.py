"""Derived values computed from a metrics snapshot at report time."""

from __future__ import annotations

import math
from typing import Any

from domain.models import UNAVAILABLE, Extra, Report, as_number


def compute_buffering_percentage(buffersize: Any, duration: Any) -> Extra:
    """floor(buffersize / duration * 100), or ``"*"`` when it cannot be known."""
    # Mixed units: buffersize is in ms, duration in s. Not normalised.
    size = as_number(buffersize)
    total = as_number(duration)
    if size is None or total is None or total <= 0:
        return UNAVAILABLE
    ratio = size / total * 100
    if not math.isfinite(ratio):
        return UNAVAILABLE
    return math.floor(ratio)


def compute_report(snapshot: Report) -> Report:
    """Return *snapshot* with its derived percentages filled in."""
    extra = snapshot.extra
    return snapshot.with_extra(
        "bufferingPercentage",
        compute_buffering_percentage(extra.get("buffersize"), extra.get("duration")),
    )
