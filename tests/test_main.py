import json
import logging

import pytest

from flappy_sim.config import GameConfig
from flappy_sim.main import build_parser, main, run_headless
from flappy_sim.storage import MemoryScoreStore


def test_headless_run_summary():
    summary = run_headless(GameConfig(), frames=300, seed=1)
    assert summary["frames"] == 300
    assert summary["games"] >= 1
    assert summary["best_score"] >= 0


def test_headless_run_is_reproducible():
    a = run_headless(GameConfig(), frames=900, seed=5)
    b = run_headless(GameConfig(), frames=900, seed=5)
    assert a == b


def test_autopilot_clears_pipes():
    store = MemoryScoreStore()
    summary = run_headless(GameConfig(), frames=1500, seed=7, store=store)
    assert summary["last_score"] >= 1
    assert summary["best_score"] >= summary["last_score"]
    # the store only hears about finished games
    assert store.best_score <= summary["best_score"]


def test_headless_summary_counts_unfinished_game(caplog):
    with caplog.at_level(logging.INFO):
        summary = run_headless(GameConfig(), frames=600, seed=3)
    assert summary["games"] == 1
    assert summary["last_score"] >= 1
    assert summary["best_score"] == summary["last_score"]
    assert f"best {summary['best_score']}" in caplog.text


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert not args.headless
    assert args.frames == 3600
    assert args.seed is None


def test_main_headless_logs_summary(caplog):
    with caplog.at_level(logging.INFO):
        main(["--headless", "--frames", "120", "--seed", "2"])
    assert "Headless run: 120 frames" in caplog.text


def test_main_exits_on_bad_config(tmp_path, caplog):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"pipe": {"spawn_interval": 0}}))
    with pytest.raises(SystemExit) as excinfo:
        main(["--headless", "--config", str(path)])
    assert excinfo.value.code == 1
    assert "spawn_interval" in caplog.text


def test_main_exits_on_mistyped_config(tmp_path, caplog):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"pipe": {"spawn_interval": "120"}}))
    with pytest.raises(SystemExit) as excinfo:
        main(["--headless", "--config", str(path)])
    assert excinfo.value.code == 1
    assert "pipe.spawn_interval must be int" in caplog.text
