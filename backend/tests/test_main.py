"""
Tests for main.py - the headless host driver and CLI.
"""

import pytest
import sys
import os
import json
import random
import argparse
from unittest.mock import Mock, patch

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import EngineConfig
from domain import GameEngine, GameStatus
from domain.constants import END_BOARD_FULL
from players import GreedyPlayer, RandomPlayer
from main import (
    END_MAX_STEPS,
    build_config,
    main,
    replay_path_for,
    run_simulation,
    save_replay,
)


@pytest.fixture
def engine():
    return GameEngine(width=20, height=20, seed=3)


@pytest.fixture
def player():
    return GreedyPlayer(rng=random.Random(0))


class TestRunSimulation:
    """Tests for run_simulation()."""

    def test_returns_summary_and_resets_engine(self, engine, player):
        summary = run_simulation(engine, player, max_steps=50, game_id="game-1")

        assert summary["game_id"] == "game-1"
        assert summary["player"] == "greedy"
        assert 0 < summary["steps"] <= 50
        assert summary["final_length"] == 3 + summary["food_eaten"]
        assert summary["final_score"] == summary["food_eaten"]
        assert summary["high_score"] == summary["final_score"]
        assert engine.status == GameStatus.NOT_STARTED
        assert engine.snake == []

    def test_stops_at_max_steps(self, engine, player):
        summary = run_simulation(engine, player, max_steps=5)
        assert summary["steps"] == 5
        assert summary["end_reason"] == END_MAX_STEPS

    def test_high_score_carries_across_sessions(self, engine, player):
        first = run_simulation(engine, player, max_steps=200)
        second = run_simulation(engine, player, max_steps=1)

        assert second["high_score"] == max(first["final_score"], second["final_score"])

    def test_realtime_sleeps_for_engine_speed(self, engine, player):
        sleep = Mock()

        run_simulation(engine, player, max_steps=5, realtime=True, sleep=sleep)

        assert sleep.call_count == 5
        for call in sleep.call_args_list:
            assert 0 < call.args[0] <= 0.2

    def test_no_sleep_by_default(self, engine, player):
        sleep = Mock()
        run_simulation(engine, player, max_steps=5, sleep=sleep)
        sleep.assert_not_called()

    def test_full_board_ends_without_steps(self, player):
        engine = GameEngine(width=3, height=1, seed=0)

        summary = run_simulation(engine, player, max_steps=10)

        assert summary["steps"] == 0
        assert summary["end_reason"] == END_BOARD_FULL

    def test_invalid_max_steps_raises(self, engine, player):
        with pytest.raises(ValueError):
            run_simulation(engine, player, max_steps=0)

    def test_player_sees_snapshots(self, engine):
        player = RandomPlayer(rng=random.Random(1))
        player.get_move = Mock(return_value="UP")

        run_simulation(engine, player, max_steps=3)

        assert player.get_move.call_count == 3
        state = player.get_move.call_args_list[0].args[0]
        assert state.status == GameStatus.RUNNING
        assert state.snake == [(10, 10), (9, 10), (8, 10)]

    def test_show_board_prints_final_board(self, engine, player, capsys):
        run_simulation(engine, player, max_steps=3, show_board=True)
        out = capsys.readouterr().out
        assert "H" in out


class TestReplay:
    """Tests for replay files."""

    def test_run_simulation_writes_replay(self, engine, player, tmp_path):
        path = tmp_path / "replays" / "game.json"

        summary = run_simulation(engine, player, max_steps=10, replay_path=str(path), game_id="abc")

        data = json.loads(path.read_text())
        assert data["metadata"]["game_id"] == "abc"
        assert data["metadata"]["player"] == "greedy"
        assert data["metadata"]["steps"] == summary["steps"]
        assert len(data["rounds"]) == summary["steps"] + 1
        assert data["rounds"][0]["status"] == "running"
        assert data["rounds"][0]["round_number"] == 0

    def test_save_replay_without_directory(self, engine, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        engine.start()

        save_replay("replay.json", [engine.get_current_state()], {"game_id": "x"})

        data = json.loads((tmp_path / "replay.json").read_text())
        assert data["metadata"] == {"game_id": "x"}
        assert len(data["rounds"]) == 1

    def test_replay_path_for_multiple_games(self):
        assert replay_path_for("out/run.json", 0, 3) == "out/run_1.json"
        assert replay_path_for("out/run", 2, 3) == "out/run_3.json"
        assert replay_path_for("run.json", 0, 1) == "run.json"
        assert replay_path_for(None, 0, 3) is None


class TestCli:
    """Tests for build_config() and main()."""

    def test_build_config_overlays_flags(self):
        args = argparse.Namespace(
            width=30, height=None, initial_speed=None,
            speed_decay=None, speed_floor=None, seed=5,
        )
        config = build_config(args, base=EngineConfig())

        assert config.width == 30
        assert config.height == 48
        assert config.seed == 5
        assert config.speed_decay == 0.9

    @patch('main.load_config', return_value=EngineConfig())
    def test_main_runs_several_games(self, mock_load_config, capsys):
        results = main([
            "--width", "20", "--height", "12", "--max-steps", "30",
            "--seed", "1", "--games", "2", "--player", "random",
        ])

        assert len(results) == 2
        assert all(r["player"] == "random" for r in results)
        assert results[1]["high_score"] == max(r["final_score"] for r in results)
        assert "Simulation Result Summary" in capsys.readouterr().out

    @patch('main.load_config', return_value=EngineConfig())
    def test_main_rejects_zero_games(self, mock_load_config):
        with pytest.raises(ValueError):
            main(["--games", "0"])

    @patch('main.load_config', return_value=EngineConfig())
    def test_main_rejects_bad_board(self, mock_load_config):
        with pytest.raises(ValueError):
            main(["--width", "2"])
