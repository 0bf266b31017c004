"""
Player implementations for the snake engine.

Players stand in for the keyboard/touch input layer when the engine is
driven headlessly (simulations, tests, demos).
"""

from .base import Player
from .random_player import RandomPlayer
from .greedy_player import GreedyPlayer, wrapped_distance
from .registry import get_player_class, list_players, AVAILABLE_PLAYERS, DEFAULT_PLAYER

__all__ = [
    'Player',
    'RandomPlayer',
    'GreedyPlayer',
    'wrapped_distance',
    'get_player_class',
    'list_players',
    'AVAILABLE_PLAYERS',
    'DEFAULT_PLAYER',
]
