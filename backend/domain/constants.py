"""
Game constants for the snake engine.
"""

from enum import Enum

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Screen coordinates: (0, 0) is the top-left cell, so UP decreases y
DIRECTION_VECTORS = {
    UP:    (0, -1),
    DOWN:  (0, 1),
    LEFT:  (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITES = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

DEFAULT_DIRECTION = RIGHT

# Board settings
DEFAULT_WIDTH = 84
DEFAULT_HEIGHT = 48
INITIAL_SNAKE_LENGTH = 3

# Speed ramp (milliseconds between steps)
DEFAULT_INITIAL_SPEED = 200
DEFAULT_SPEED_DECAY = 0.9
DEFAULT_SPEED_FLOOR = 50

# Food placement
MAX_FOOD_ATTEMPTS = 100
DENSE_BOARD_THRESHOLD = 0.5

# End reasons
END_SELF_COLLISION = "self_collision"
END_BOARD_FULL = "board_full"


class GameStatus(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"
