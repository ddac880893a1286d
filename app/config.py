"""Aggregator configuration with typed fields and sane defaults."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

from domain.models import COUNTER_NAMES
from domain.percentage import validate_thresholds

logger = logging.getLogger(__name__)

_CONFIG_PATH = Path("stats_config.json")

# Fields written to / read from the JSON file.
_PERSISTED = ("run_each_ms", "on_completion", "counters")


@dataclass
class Config:
    # Reporting
    run_each_ms: int = 5000        # interval between reports
    on_completion: list[int] = field(default_factory=list)  # ascending % thresholds

    # Counters included in every report
    counters: list[str] = field(default_factory=lambda: list(COUNTER_NAMES))

    # Called with each report dict (not persisted)
    on_report: Optional[Callable[[dict], None]] = field(default=None, repr=False, compare=False)

    def validate(self) -> None:
        if isinstance(self.run_each_ms, bool) or not isinstance(self.run_each_ms, int):
            raise ValueError(f"run_each_ms must be an int, got {self.run_each_ms!r}")
        if self.run_each_ms <= 0:
            raise ValueError(f"run_each_ms must be positive, got {self.run_each_ms}")
        if not isinstance(self.on_completion, (list, tuple)):
            raise ValueError(f"on_completion must be a list, got {self.on_completion!r}")
        validate_thresholds(self.on_completion)
        if not isinstance(self.counters, (list, tuple)):
            raise ValueError(f"counters must be a list, got {self.counters!r}")
        unknown = [name for name in self.counters if name not in COUNTER_NAMES]
        if unknown:
            raise ValueError(f"unknown counter names: {unknown}")
        if self.on_report is not None and not callable(self.on_report):
            raise ValueError("on_report must be callable")

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in _PERSISTED}

    def save(self, path: Path = _CONFIG_PATH) -> None:
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(self.to_dict(), fh, indent=2)
        logger.debug("Config saved to %s", path)

    @classmethod
    def load(cls, path: Path = _CONFIG_PATH) -> "Config":
        if not path.exists():
            return cls()
        try:
            with open(path, encoding="utf-8") as fh:
                data = json.load(fh)
            cfg = cls()
            for k, v in data.items():
                if k in _PERSISTED:
                    setattr(cfg, k, v)
            logger.debug("Config loaded from %s", path)
            return cfg
        except (OSError, json.JSONDecodeError, AttributeError) as exc:
            logger.warning("Could not load config (%s); using defaults.", exc)
            return cls()
