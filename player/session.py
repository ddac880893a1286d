"""Player session: the source of lifecycle and progress events."""

from __future__ import annotations

import logging
from typing import Any, Optional

from PySide6.QtCore import QObject, Signal

from domain.models import EventKind

logger = logging.getLogger(__name__)


class PlayerSession(QObject):
    """Emits ``event(name, payload)`` for everything the player does.

    Any object with an ``event`` signal of the same shape can be bound to
    :class:`app.aggregator.PlaybackStats`; this one adds typed helpers used
    by the demo entry point and the tests.
    """

    event = Signal(str, object)

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)

    def emit_event(self, kind: EventKind | str, payload: Any = None) -> None:
        name = kind.value if isinstance(kind, EventKind) else kind
        logger.debug("Player event: %s %r", name, payload)
        self.event.emit(name, payload)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def play(self) -> None:
        self.emit_event(EventKind.PLAY)

    def playing(self) -> None:
        self.emit_event(EventKind.PLAYING)

    def pause(self) -> None:
        self.emit_event(EventKind.PAUSE)

    def stop(self) -> None:
        self.emit_event(EventKind.STOP)

    def ended(self) -> None:
        self.emit_event(EventKind.ENDED)

    def error(self, message: str = "") -> None:
        self.emit_event(EventKind.ERROR, {"message": message})

    def buffering(self) -> None:
        self.emit_event(EventKind.BUFFERING_START)

    def buffer_full(self) -> None:
        self.emit_event(EventKind.BUFFERING_END)

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def seek(self, time_s: float, dvr_in_use: bool = False) -> None:
        self.emit_event(EventKind.SEEK, {"time": time_s, "dvr_in_use": dvr_in_use})

    def fullscreen(self, enabled: bool = True) -> None:
        self.emit_event(EventKind.FULLSCREEN, enabled)

    def level_change(self, level: Any = None) -> None:
        self.emit_event(EventKind.LEVEL_CHANGE, level)

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    def time_updated(self, current: Any, total: Any = None) -> None:
        payload = {"current": current}
        if total is not None:
            payload["total"] = total
        self.emit_event(EventKind.TIME_UPDATE, payload)

    def progress(self, current: Any) -> None:
        self.emit_event(EventKind.PROGRESS, {"current": current})

    def duration_changed(self, seconds: Any) -> None:
        self.emit_event(EventKind.DURATION, seconds)
