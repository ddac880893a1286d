"""Tests for the watch-time state machine."""

import pytest

from domain.metrics_store import MetricsStore
from domain.models import WatchState
from domain.state_machine import WatchStateMachine


@pytest.fixture
def store(manual_clock):
    return MetricsStore(clock=manual_clock)


def test_initial_state(store):
    sm = WatchStateMachine(store)
    assert sm.current_state == WatchState.IDLE
    assert not store.is_running("watch")


def test_enter_then_leave_accumulates(store, manual_clock):
    sm = WatchStateMachine(store)
    assert sm.enter("play") is True
    manual_clock.advance(300)
    assert sm.leave("pause") is True
    assert sm.current_state == WatchState.IDLE
    assert store.snapshot().timers["watch"] == 300


def test_repeated_enter_is_noop(store, manual_clock):
    sm = WatchStateMachine(store)
    sm.enter("play")
    manual_clock.advance(100)
    assert sm.enter("playing") is False
    manual_clock.advance(100)
    sm.leave("pause")
    assert store.snapshot().timers["watch"] == 200


def test_leave_while_idle_is_noop(store, manual_clock):
    sm = WatchStateMachine(store)
    assert sm.leave("pause") is False
    sm.enter("play")
    manual_clock.advance(50)
    sm.leave("pause")
    manual_clock.advance(50)
    assert sm.leave("stop") is False
    assert store.snapshot().timers["watch"] == 50


def test_transition_callback_fires():
    store = MetricsStore(clock=lambda: 0.0)
    sm = WatchStateMachine(store)
    fired = []
    sm.set_on_transition(lambda state, reason: fired.append((state, reason)))

    sm.enter("play")
    sm.enter("playing")
    sm.leave("buffering")

    assert fired == [
        (WatchState.ACCUMULATING, "play"),
        (WatchState.IDLE, "buffering"),
    ]


def test_abandon_goes_idle_without_flushing(store, manual_clock):
    sm = WatchStateMachine(store)
    sm.enter("play")
    manual_clock.advance(400)
    sm.abandon()
    store.abandon_timers()
    assert sm.current_state == WatchState.IDLE
    assert store.snapshot().timers["watch"] == 0
