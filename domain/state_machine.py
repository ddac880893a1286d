"""Two-state machine that owns the watch-time accumulation window."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from domain.metrics_store import MetricsStore
from domain.models import WatchState

logger = logging.getLogger(__name__)


class WatchStateMachine:
    """IDLE <-> ACCUMULATING.

    The watch timer is only ever started in :meth:`enter` and stopped in
    :meth:`leave`; each transition happens at most once per boundary, so
    repeated or out-of-order events cannot open or close a window twice.
    """

    def __init__(self, store: MetricsStore, timer: str = "watch") -> None:
        self._store = store
        self._timer = timer
        self._state = WatchState.IDLE
        self._on_transition: Optional[Callable[[WatchState, str], None]] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def enter(self, reason: str) -> bool:
        """Start accumulating; return False if already accumulating."""
        if self._state == WatchState.ACCUMULATING:
            return False
        self._store.start_timer(self._timer)
        self._commit(WatchState.ACCUMULATING, reason)
        return True

    def leave(self, reason: str) -> bool:
        """Close the open window; return False if already idle."""
        if self._state == WatchState.IDLE:
            return False
        self._store.stop_timer(self._timer)
        self._commit(WatchState.IDLE, reason)
        return True

    def abandon(self) -> None:
        """Go idle without closing the window (session teardown)."""
        self._state = WatchState.IDLE

    def set_on_transition(self, callback: Callable[[WatchState, str], None]) -> None:
        self._on_transition = callback

    @property
    def current_state(self) -> WatchState:
        return self._state

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _commit(self, new_state: WatchState, reason: str) -> None:
        logger.debug("Watch: %s → %s  (%s)", self._state.value, new_state.value, reason)
        self._state = new_state
        if self._on_transition:
            self._on_transition(new_state, reason)
