"""
GameEngine - the single owner of all mutable game state.

The engine has no notion of wall-clock time. A host calls step() at whatever
cadence it derives from `engine.speed`, and re-reads `speed` after each call
because eating food shortens it.
"""

import logging
import numbers
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .constants import (
    DEFAULT_DIRECTION,
    DEFAULT_HEIGHT,
    DEFAULT_INITIAL_SPEED,
    DEFAULT_SPEED_DECAY,
    DEFAULT_SPEED_FLOOR,
    DEFAULT_WIDTH,
    DENSE_BOARD_THRESHOLD,
    DIRECTION_VECTORS,
    END_BOARD_FULL,
    END_SELF_COLLISION,
    INITIAL_SNAKE_LENGTH,
    MAX_FOOD_ATTEMPTS,
    OPPOSITES,
    VALID_MOVES,
    GameStatus,
)
from .game_state import GameState
from .snake import Position, Snake

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepResult:
    """Outcome of a single step() call."""
    moved: bool
    ate_food: bool
    collided: bool
    board_full: bool
    status: GameStatus
    head: Optional[Position]
    score: int
    speed: int


class GameEngine:
    """
    Single-snake, step-based engine on a toroidal grid.

    Manages:
      - Snake body and the current/pending direction pair
      - Food placement
      - Score and high score
      - Speed ramp
      - NotStarted / Running / Paused / GameOver status

    No call sequence raises: stepping while not running, reversing the
    snake or filling the board are all no-ops or regular transitions.
    """

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        initial_speed: int = DEFAULT_INITIAL_SPEED,
        speed_decay: float = DEFAULT_SPEED_DECAY,
        speed_floor: int = DEFAULT_SPEED_FLOOR,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        if width < INITIAL_SNAKE_LENGTH or height < 1:
            raise ValueError(
                f"Board must be at least {INITIAL_SNAKE_LENGTH}x1, got {width}x{height}."
            )
        if initial_speed <= 0 or speed_floor <= 0:
            raise ValueError("Speeds must be positive.")
        if speed_floor > initial_speed:
            raise ValueError(
                f"Speed floor {speed_floor} is above the initial speed {initial_speed}."
            )
        if not 0 < speed_decay <= 1:
            raise ValueError(f"Speed decay must be in (0, 1], got {speed_decay}.")

        self.width = width
        self.height = height
        self.initial_speed = initial_speed
        self.speed_decay = speed_decay
        self.speed_floor = speed_floor
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self.high_score = 0
        self._clear_session()

    # -------------------------------
    # Read accessors
    # -------------------------------

    @property
    def snake(self) -> List[Position]:
        return self._snake.as_list()

    @property
    def head(self) -> Optional[Position]:
        return self._snake.head if self._snake else None

    @property
    def is_started(self) -> bool:
        """An empty snake is the canonical 'show the start screen' signal."""
        return bool(self._snake)

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        return GameState(
            round_number=self.round_number,
            snake=self._snake.as_list(),
            food=self.food,
            direction=self.direction,
            pending_direction=self.pending_direction,
            score=self.score,
            high_score=self.high_score,
            speed=self.speed,
            status=self.status,
            width=self.width,
            height=self.height,
            end_reason=self.end_reason,
        )

    # -------------------------------
    # Commands
    # -------------------------------

    def start(self) -> None:
        """
        Begin a session from NotStarted or GameOver. Ignored while a game is
        running or paused.
        """
        if self.status in (GameStatus.RUNNING, GameStatus.PAUSED):
            logger.debug(f"start() ignored while {self.status.value}")
            return
        if self.status == GameStatus.GAME_OVER:
            self._commit_high_score()

        self._clear_session()
        cx, cy = self.width // 2, self.height // 2
        self._snake = Snake([((cx - i) % self.width, cy) for i in range(INITIAL_SNAKE_LENGTH)])
        self.status = GameStatus.RUNNING
        self.food = self._place_food(self._snake.positions)
        logger.info(f"Game started on {self.width}x{self.height} board, food at {self.food}")

        if self.food is None:
            self._end(END_BOARD_FULL)

    def restore(
        self,
        snake: Iterable[Position],
        direction: str = DEFAULT_DIRECTION,
        food: Optional[Position] = None,
        score: int = 0,
        speed: Optional[int] = None,
    ) -> None:
        """
        Load an arbitrary running position, e.g. a saved snapshot.

        Raises:
            ValueError: if the positions are out of bounds or overlap, the food
                        sits on the snake, or the direction is unknown.
        """
        positions = [self._check_in_bounds(tuple(p)) for p in snake]
        if not positions:
            raise ValueError("Cannot restore an empty snake.")
        if not isinstance(direction, str) or direction not in VALID_MOVES:
            raise ValueError(f"Unknown direction {direction!r}.")
        if score < 0:
            raise ValueError(f"Score must be non-negative, got {score}.")
        restored = Snake(positions)
        if food is not None:
            food = self._check_in_bounds(tuple(food))
            if restored.occupies(food):
                raise ValueError(f"Food {food} is on the snake.")

        # The replaced session counts as finished
        self._commit_high_score()
        self._clear_session()
        self._snake = restored
        self.direction = direction
        self.pending_direction = direction
        self.score = score
        if speed is not None:
            self.speed = max(self.speed_floor, min(self.initial_speed, speed))
        self.status = GameStatus.RUNNING
        self.food = food if food is not None else self._place_food(restored.positions)
        logger.debug(f"Restored snake of length {len(restored)} heading {direction}")

        if self.food is None:
            self._end(END_BOARD_FULL)

    def request_direction(self, direction: str) -> bool:
        """
        Queue a turn for the next tick.

        Rejected when it would reverse the current heading, when the value is
        not a direction, or when no game is in progress (NotStarted/GameOver).
        Paused games still accept turns so the queued one is ready on resume.

        Returns:
            True if the pending direction was updated.
        """
        if not isinstance(direction, str) or direction.upper() not in VALID_MOVES:
            logger.debug(f"Ignoring unknown direction {direction!r}")
            return False
        direction = direction.upper()
        if self.status in (GameStatus.NOT_STARTED, GameStatus.GAME_OVER):
            return False
        if direction == OPPOSITES[self.direction]:
            logger.debug(f"Ignoring reversal from {self.direction} to {direction}")
            return False

        self.pending_direction = direction
        return True

    def toggle_pause(self) -> None:
        if self.status == GameStatus.RUNNING:
            self.status = GameStatus.PAUSED
        elif self.status == GameStatus.PAUSED:
            self.status = GameStatus.RUNNING
        else:
            return
        logger.debug(f"Game {self.status.value}")

    def reset(self) -> None:
        """
        Return to NotStarted from any state. Commits the session score into
        the high score; calling it twice in a row is harmless.
        """
        self._commit_high_score()
        self._clear_session()
        logger.debug("Game reset")

    def step(self) -> StepResult:
        """
        Advance the world by one tick.

        Steps:
          1) Apply the pending direction
          2) Move the head one cell, wrapping around the board edges
          3) Collide with any existing segment -> game over, body untouched
          4) Eat food (grow, score, speed up, new food) or drop the tail
        """
        if self.status != GameStatus.RUNNING:
            return self._result()

        self.direction = self.pending_direction
        dx, dy = DIRECTION_VECTORS[self.direction]
        hx, hy = self._snake.head
        new_head = ((hx + dx) % self.width, (hy + dy) % self.height)

        # Includes the tail cell even though it would move this tick
        if self._snake.occupies(new_head):
            self._end(END_SELF_COLLISION)
            return self._result(collided=True)

        ate_food = new_head == self.food
        self._snake.advance(new_head, grow=ate_food)
        self.round_number += 1

        if not ate_food:
            return self._result(moved=True)

        self.score += 1
        self.speed = self._next_speed()
        self.food = self._place_food(self._snake.positions)
        logger.debug(f"Food eaten at {new_head}, score {self.score}, speed {self.speed}ms")

        if self.food is None:
            self._end(END_BOARD_FULL)
            return self._result(moved=True, ate_food=True, board_full=True)

        return self._result(moved=True, ate_food=True)

    # -------------------------------
    # Internals
    # -------------------------------

    def _clear_session(self) -> None:
        self._snake = Snake()
        self.food: Optional[Position] = None
        self.direction = DEFAULT_DIRECTION
        self.pending_direction = DEFAULT_DIRECTION
        self.score = 0
        self.speed = self.initial_speed
        self.round_number = 0
        self.end_reason: Optional[str] = None
        self.status = GameStatus.NOT_STARTED

    def _commit_high_score(self) -> None:
        if self.score > self.high_score:
            logger.info(f"New high score: {self.score} (previous {self.high_score})")
            self.high_score = self.score

    def _end(self, reason: str) -> None:
        self.status = GameStatus.GAME_OVER
        self.end_reason = reason
        logger.info(f"Game over ({reason}) after {self.round_number} moves, score {self.score}")

    def _next_speed(self) -> int:
        return max(self.speed_floor, int(self.speed * self.speed_decay))

    def _check_in_bounds(self, cell: Tuple) -> Position:
        """Validate an (x, y) pair and return it with plain int coordinates."""
        if len(cell) != 2 or not all(
            isinstance(v, numbers.Integral) and not isinstance(v, bool) for v in cell
        ):
            raise ValueError(f"Position must be an (x, y) pair of ints, got {cell}.")
        x, y = int(cell[0]), int(cell[1])
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"Position {cell} is outside the {self.width}x{self.height} board.")
        return (x, y)

    def _place_food(self, excluded: Iterable[Position]) -> Optional[Position]:
        """
        Pick a free cell for the food, or None if the board is full.

        Sparse boards use rejection sampling; once the snake covers half the
        board (or sampling runs out of attempts) every free cell is listed
        and one is drawn uniformly.
        """
        occupied = set(excluded)
        total_cells = self.width * self.height
        if len(occupied) >= total_cells:
            return None

        if len(occupied) / total_cells < DENSE_BOARD_THRESHOLD:
            for _ in range(MAX_FOOD_ATTEMPTS):
                cell = (int(self.rng.integers(self.width)), int(self.rng.integers(self.height)))
                if cell not in occupied:
                    return cell
            logger.debug(f"No free cell after {MAX_FOOD_ATTEMPTS} random draws, enumerating")

        free_cells = self._free_cells(occupied)
        return free_cells[int(self.rng.integers(len(free_cells)))]

    def _free_cells(self, occupied: set) -> List[Position]:
        mask = np.ones((self.height, self.width), dtype=bool)
        for x, y in occupied:
            mask[y, x] = False
        ys, xs = np.nonzero(mask)
        return [(int(x), int(y)) for x, y in zip(xs, ys)]

    def _result(
        self,
        moved: bool = False,
        ate_food: bool = False,
        collided: bool = False,
        board_full: bool = False,
    ) -> StepResult:
        return StepResult(
            moved=moved,
            ate_food=ate_food,
            collided=collided,
            board_full=board_full,
            status=self.status,
            head=self.head,
            score=self.score,
            speed=self.speed,
        )

    def __repr__(self):
        return (
            f"<GameEngine {self.width}x{self.height}, status={self.status.value}, "
            f"score={self.score}, high_score={self.high_score}>"
        )
