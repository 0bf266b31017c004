"""
Domain entities for the snake game engine.

This module contains the core game entities that are independent of
rendering, input handling and scheduling concerns.
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, OPPOSITES, DIRECTION_VECTORS,
    GameStatus,
)
from .snake import Snake
from .game_state import GameState
from .engine import GameEngine, StepResult

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'OPPOSITES', 'DIRECTION_VECTORS',
    'GameStatus',
    'Snake',
    'GameState',
    'GameEngine',
    'StepResult',
]
