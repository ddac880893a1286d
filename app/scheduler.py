"""Fixed-interval report emission driven by a Qt timer."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from domain.metrics import compute_report
from domain.metrics_store import MetricsStore

logger = logging.getLogger(__name__)


class ReportScheduler(QObject):
    """Snapshots the store on every timer tick and emits the report.

    A pure observer: ticks never reset or otherwise mutate the store.
    """

    reported = Signal(object)

    def __init__(
        self,
        store: MetricsStore,
        run_each_ms: int,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._timer = QTimer(self)
        self._timer.setInterval(run_each_ms)
        self._timer.timeout.connect(self.tick)

    def start(self) -> None:
        if not self._timer.isActive():
            self._timer.start()
            logger.debug("Reporting every %d ms", self._timer.interval())

    def stop(self) -> None:
        self._timer.stop()

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    def tick(self) -> dict:
        report = compute_report(self._store.snapshot()).to_dict()
        self.reported.emit(report)
        return report
