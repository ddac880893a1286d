"""Smoke test for the scripted demo entry point."""

import logging

from app.main import main


def test_demo_session_runs_to_completion(tmp_path, caplog):
    caplog.set_level(logging.INFO)

    ret = main(["--config", str(tmp_path / "stats_config.json")])

    assert ret == 0
    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("Report: ") for m in messages)
    completions = [m for m in messages if m.startswith("Completion: ")]
    assert completions == ["Completion: 10%", "Completion: 25%", "Completion: 50%", "Completion: 100%"]
    assert "Torn down." in messages
