"""Tests for configuration defaults, validation and persistence."""

import json

import pytest

from app.config import Config
from domain.models import COUNTER_NAMES


def test_defaults_are_valid():
    cfg = Config()
    cfg.validate()
    assert cfg.run_each_ms == 5000
    assert cfg.on_completion == []
    assert cfg.counters == list(COUNTER_NAMES)
    assert cfg.on_report is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"run_each_ms": -1},
        {"run_each_ms": 1.5},
        {"on_completion": [10, 110]},
        {"counters": ["views"]},
        {"on_report": "print"},
    ],
)
def test_validate_rejects(kwargs):
    with pytest.raises(ValueError):
        Config(**kwargs).validate()


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "stats_config.json"
    Config(run_each_ms=250, on_completion=[25, 50], on_report=print).save(path)

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert "on_report" not in saved

    cfg = Config.load(path)
    assert cfg.run_each_ms == 250
    assert cfg.on_completion == [25, 50]
    assert cfg.on_report is None


def test_load_missing_file_gives_defaults(tmp_path):
    assert Config.load(tmp_path / "missing.json") == Config()


def test_load_ignores_unknown_keys(tmp_path):
    path = tmp_path / "stats_config.json"
    path.write_text(json.dumps({"run_each_ms": 1000, "theme": "dark"}), encoding="utf-8")
    cfg = Config.load(path)
    assert cfg.run_each_ms == 1000
    assert not hasattr(cfg, "theme")


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_load_unreadable_file_gives_defaults(tmp_path, content):
    path = tmp_path / "stats_config.json"
    path.write_text(content, encoding="utf-8")
    assert Config.load(path) == Config()


@pytest.mark.parametrize("key", ["counters", "on_completion"])
def test_null_list_in_file_fails_validation(tmp_path, key):
    path = tmp_path / "stats_config.json"
    path.write_text(json.dumps({key: None}), encoding="utf-8")
    with pytest.raises(ValueError):
        Config.load(path).validate()
