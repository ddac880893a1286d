"""Application entry point: runs a scripted player session and logs reports."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure project root is on the path when running as `python app/main.py`
_ROOT = Path(__file__).parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from PySide6.QtCore import QCoreApplication, QTimer

from app.aggregator import PlaybackStats
from app.config import Config
from player.session import PlayerSession

# (delay ms, method name, args): a short viewing of a 40 s clip.
_SCRIPT: list[tuple[int, str, tuple]] = [
    (0, "duration_changed", (40.0,)),
    (100, "play", ()),
    (400, "playing", ()),
    (700, "time_updated", (4.0,)),
    (1000, "level_change", ("720p",)),
    (1300, "time_updated", (10.0,)),
    (1600, "buffering", ()),
    (1900, "buffer_full", ()),
    (1950, "playing", ()),
    (2200, "time_updated", (20.0,)),
    (2500, "fullscreen", (True,)),
    (2800, "pause", ()),
    (3100, "seek", (2.0,)),
    (3400, "play", ()),
    (3450, "playing", ()),
    (3700, "time_updated", (40.0,)),
    (4000, "ended", ()),
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Playback stats demo session.")
    parser.add_argument("--config", type=Path, default=Path("stats_config.json"))
    parser.add_argument("--verbose", action="store_true", help="log every event")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    _configure_logging(args.verbose)
    logger = logging.getLogger(__name__)
    logger.info("Playback stats – starting up.")

    app = QCoreApplication.instance() or QCoreApplication(sys.argv)

    config = Config.load(args.config)
    if not config.on_completion:
        config.on_completion = [10, 25, 50, 75, 100]
    config.run_each_ms = min(config.run_each_ms, 1000)
    config.on_report = lambda report: logger.info("Report: %s", json.dumps(report))

    session = PlayerSession()
    stats = PlaybackStats(config)
    stats.percentage.connect(lambda pct: logger.info("Completion: %d%%", pct))
    stats.bind(session)

    for delay, method, method_args in _SCRIPT:
        QTimer.singleShot(delay, lambda m=method, a=method_args: getattr(session, m)(*a))

    def _finish() -> None:
        stats.tick()
        stats.teardown()
        app.quit()

    QTimer.singleShot(_SCRIPT[-1][0] + 500, _finish)

    ret = app.exec()
    logger.info("Exiting with code %d.", ret)
    return ret


if __name__ == "__main__":
    sys.exit(main())
