"""
Tests for the autopilot players.
"""

import pytest
import sys
import os
import random

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import GameState, GameStatus, UP, DOWN, LEFT, RIGHT, VALID_MOVES
from players import (
    Player,
    RandomPlayer,
    GreedyPlayer,
    wrapped_distance,
    get_player_class,
    list_players,
    AVAILABLE_PLAYERS,
)


def make_state(snake, direction=RIGHT, food=(7, 7), width=10, height=10):
    return GameState(
        round_number=0,
        snake=snake,
        food=food,
        direction=direction,
        pending_direction=direction,
        score=0,
        high_score=0,
        speed=200,
        status=GameStatus.RUNNING,
        width=width,
        height=height,
    )


class TestPlayerBase:
    """Tests for the Player base class helpers."""

    def test_get_move_not_implemented(self):
        with pytest.raises(NotImplementedError):
            Player().get_move(make_state([(5, 5)]))

    def test_next_cell_wraps(self):
        state = make_state([(0, 0)], direction=LEFT)
        assert Player.next_cell(state, LEFT) == (9, 0)
        assert Player.next_cell(state, UP) == (0, 9)

    def test_safe_moves_exclude_reverse(self):
        state = make_state([(0, 0)], direction=LEFT)
        assert Player().safe_moves(state) == [DOWN, LEFT, UP]

    def test_safe_moves_treat_tail_as_occupied(self):
        # Square loop: moving DOWN would enter the tail cell
        state = make_state([(5, 5), (6, 5), (6, 6), (5, 6)], direction=LEFT)
        assert DOWN not in Player().safe_moves(state)


class TestRandomPlayer:
    """Tests for the RandomPlayer class."""

    def test_random_player_returns_valid_move(self):
        player = RandomPlayer(rng=random.Random(1))
        move = player.get_move(make_state([(5, 5), (4, 5)]))
        assert move in VALID_MOVES

    def test_random_player_avoids_self_collision(self):
        player = RandomPlayer(rng=random.Random(2))
        state = make_state([(5, 5), (4, 5), (5, 6)], direction=RIGHT)

        for _ in range(20):
            move = player.get_move(state)
            assert move in {UP, RIGHT}, f"Expected UP or RIGHT, got {move}"

    def test_trapped_player_keeps_heading(self):
        player = RandomPlayer(rng=random.Random(3))
        state = make_state([(1, 1), (0, 1), (2, 1), (1, 0), (1, 2)], direction=RIGHT)
        assert player.get_move(state) == RIGHT


class TestGreedyPlayer:
    """Tests for the GreedyPlayer class."""

    def test_keeps_heading_towards_food(self):
        player = GreedyPlayer(rng=random.Random(0))
        assert player.get_move(make_state([(5, 5)], food=(8, 5))) == RIGHT

    def test_turns_towards_food(self):
        player = GreedyPlayer(rng=random.Random(0))
        # UP decreases y on screen
        assert player.get_move(make_state([(5, 5)], food=(5, 2))) == UP

    def test_uses_wrapped_distance(self):
        player = GreedyPlayer(rng=random.Random(0))
        state = make_state([(1, 5)], direction=UP, food=(9, 5))
        assert player.get_move(state) == LEFT

    def test_without_food_moves_safely(self):
        player = GreedyPlayer(rng=random.Random(0))
        state = make_state([(5, 5), (4, 5), (5, 6)], food=None)
        assert player.get_move(state) in {UP, RIGHT}

    def test_wrapped_distance(self):
        assert wrapped_distance((0, 0), (9, 9), 10, 10) == 2
        assert wrapped_distance((2, 3), (5, 3), 10, 10) == 3


class TestPlayerRegistry:
    """Tests for the player registry."""

    def test_get_player_class(self):
        assert get_player_class("random") is RandomPlayer
        assert get_player_class(" Greedy ") is GreedyPlayer

    def test_default_player(self):
        assert get_player_class(None) is GreedyPlayer
        assert get_player_class("") is GreedyPlayer

    def test_unknown_player_raises(self):
        with pytest.raises(ValueError, match="Unknown player"):
            get_player_class("bogus")

    def test_unknown_player_message_lists_choices(self):
        with pytest.raises(ValueError, match="random, greedy"):
            get_player_class("snek")

    def test_list_players_matches_registry(self):
        assert [p["key"] for p in list_players()] == AVAILABLE_PLAYERS
