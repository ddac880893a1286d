"""Per-session aggregator: binds player events to the metrics store."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from PySide6.QtCore import QObject, Signal

from app.config import Config
from app.scheduler import ReportScheduler
from domain.metrics_store import Clock, MetricsStore, monotonic_ms
from domain.models import UNAVAILABLE, EventKind, as_number
from domain.percentage import PercentageTracker
from domain.state_machine import WatchStateMachine

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


def _field(payload: Any, key: str) -> Any:
    if isinstance(payload, Mapping):
        return payload.get(key)
    return None


class PlaybackStats(QObject):
    """Owns the metrics store, watch state machine, percentage tracker and
    report scheduler for exactly one player session.

    Events are handled synchronously in the order the session emits them.
    Nothing here raises on bad input: unknown events are ignored and
    unreadable payload values become ``"*"``.
    """

    report = Signal(object)
    percentage = Signal(int)

    def __init__(
        self,
        config: Optional[Config] = None,
        clock: Clock = monotonic_ms,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.config = config or Config()
        self.config.validate()

        self.store = MetricsStore(self.config.counters, clock=clock)
        self.watch = WatchStateMachine(self.store)
        self.tracker = PercentageTracker(self.config.on_completion)
        self.scheduler = ReportScheduler(self.store, self.config.run_each_ms, parent=self)
        self.scheduler.reported.connect(self._on_reported)

        self._session: Optional[QObject] = None
        self._torn_down = False

        self._handlers: dict[EventKind, Handler] = {
            EventKind.PLAY: self._on_play,
            EventKind.PLAYING: self._on_playing,
            EventKind.PAUSE: self._on_pause,
            EventKind.STOP: self._on_stop,
            EventKind.ENDED: self._on_stop,
            EventKind.ERROR: self._on_error,
            EventKind.BUFFERING_START: self._on_buffering,
            EventKind.BUFFERING_END: self._ignore,
            EventKind.SEEK: self._on_seek,
            EventKind.FULLSCREEN: self._count("fullscreen"),
            EventKind.LEVEL_CHANGE: self._count("changeLevel"),
            EventKind.TIME_UPDATE: self._on_time_update,
            EventKind.PROGRESS: self._on_progress,
            EventKind.DURATION: self._on_duration,
        }
        missing = set(EventKind) - set(self._handlers)
        if missing:
            raise ValueError(f"no handler for event kinds: {sorted(k.value for k in missing)}")

        # Startup runs from construction until the first frame is playing.
        self.store.start_timer("session")
        self.store.start_timer("startup")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def bind(self, session: QObject) -> None:
        """Subscribe to *session*'s ``event`` signal and start reporting."""
        if self._session is not None:
            raise RuntimeError("PlaybackStats is already bound to a session.")
        if self._torn_down:
            raise RuntimeError("PlaybackStats has been torn down.")
        session.event.connect(self.handle)  # type: ignore[attr-defined]
        self._session = session
        self.scheduler.start()
        logger.info("Bound to session; reporting every %d ms.", self.config.run_each_ms)

    def teardown(self) -> None:
        """Unsubscribe, stop reporting and abandon open timer windows."""
        if self._torn_down:
            return
        self._torn_down = True
        self.scheduler.stop()
        if self._session is not None:
            try:
                self._session.event.disconnect(self.handle)  # type: ignore[attr-defined]
            except (RuntimeError, TypeError) as exc:
                logger.debug("Session already disconnected: %s", exc)
            self._session = None
        self.watch.abandon()
        self.store.abandon_timers()
        logger.info("Torn down.")

    @property
    def is_bound(self) -> bool:
        return self._session is not None

    # ------------------------------------------------------------------
    # Event dispatch
    # ------------------------------------------------------------------

    def handle(self, name: Any, payload: Any = None) -> None:
        if self._torn_down:
            return
        kind = EventKind.parse(name)
        if kind is None:
            logger.debug("Ignoring unknown event %r", name)
            return
        self._handlers[kind](payload)

    def tick(self) -> dict:
        """Emit a report now, outside the regular cadence."""
        return self.scheduler.tick()

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _on_play(self, _payload: Any) -> None:
        self.store.increment("play")
        self.watch.enter("play")

    def _on_playing(self, _payload: Any) -> None:
        if self.store.is_running("startup"):
            self.store.stop_timer("startup")
            logger.debug("First frame; startup timer stopped.")
        self.watch.enter("playing")

    def _on_pause(self, _payload: Any) -> None:
        self.store.increment("pause")
        self.watch.leave("pause")

    def _on_stop(self, _payload: Any) -> None:
        self.watch.leave("stop")

    def _on_error(self, payload: Any) -> None:
        self.store.increment("error")
        self.watch.leave("error")
        logger.debug("Player error: %r", payload)

    def _on_buffering(self, _payload: Any) -> None:
        self.store.increment("buffering")
        self.watch.leave("buffering")

    def _on_seek(self, payload: Any) -> None:
        self.store.increment("seek")
        if _field(payload, "dvr_in_use"):
            self.store.increment("dvrUsage")

    def _count(self, counter: str) -> Handler:
        def handler(_payload: Any) -> None:
            self.store.increment(counter)

        return handler

    def _ignore(self, _payload: Any) -> None:
        pass

    def _on_time_update(self, payload: Any) -> None:
        total = as_number(_field(payload, "total"))
        if total is not None and total > 0:
            self.store.set_extra("duration", total)
        self._on_progress(payload)

    def _on_progress(self, payload: Any) -> None:
        current = as_number(_field(payload, "current"))
        self.store.set_extra("buffersize", UNAVAILABLE if current is None else current * 1000)

        threshold = self.tracker.update(current, self.store.get_extra("duration"))
        if threshold is not None:
            logger.debug("Completion threshold reached: %d%%", threshold)
            self.percentage.emit(threshold)

    def _on_duration(self, payload: Any) -> None:
        seconds = as_number(payload)
        if seconds is None or seconds <= 0:
            self.store.set_extra("duration", UNAVAILABLE)
            return
        self.store.set_extra("duration", seconds)

    def _on_reported(self, report: dict) -> None:
        self.report.emit(report)
        if self.config.on_report is not None:
            self.config.on_report(report)
