"""Tests for report-time derived metrics."""

import pytest

from domain.metrics import compute_buffering_percentage, compute_report
from domain.models import UNAVAILABLE, Report


def test_buffering_percentage_available():
    assert compute_buffering_percentage(117, 234) == 50


def test_buffering_percentage_is_floored():
    assert compute_buffering_percentage(100, 300) == 33


def test_buffersize_unavailable():
    assert compute_buffering_percentage(UNAVAILABLE, 234) == UNAVAILABLE


@pytest.mark.parametrize("duration", [0, -1, UNAVAILABLE, None, float("nan")])
def test_duration_unusable(duration):
    assert compute_buffering_percentage(117, duration) == UNAVAILABLE


def test_compute_report_fills_buffering_percentage():
    snapshot = Report.build(
        counters={"play": 1},
        timers={"watch": 10},
        extra={"duration": 234, "buffersize": 117, "bufferingPercentage": UNAVAILABLE},
    )
    report = compute_report(snapshot)
    assert report.extra["bufferingPercentage"] == 50
    assert snapshot.extra["bufferingPercentage"] == UNAVAILABLE
    assert report.to_dict() == {
        "counters": {"play": 1},
        "timers": {"watch": 10},
        "extra": {"duration": 234, "buffersize": 117, "bufferingPercentage": 50},
    }


def test_overflowing_ratio_is_unavailable():
    assert compute_buffering_percentage(1e303, 1e-10) == UNAVAILABLE


def test_huge_int_is_unavailable():
    assert compute_buffering_percentage(10**400, 40) == UNAVAILABLE
