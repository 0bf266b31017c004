"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import Any, Dict, List, Optional, Tuple

from .constants import GameStatus


class GameState:
    """
    A read-only snapshot of the engine at a specific tick.

    Renderers and players receive one of these instead of the engine itself,
    so nothing they do can mutate the live game.

    Attributes:
        round_number: how many moves have been made this session
        snake: list of (x, y) from head to tail (empty when not started)
        food: (x, y) of the food, or None when no food is placed
        direction: direction applied on the last tick
        pending_direction: direction that the next tick will apply
        score, high_score: current and best-so-far scores
        speed: milliseconds the host should wait before the next step
        status: GameStatus value
        width, height: board dimensions
    """

    def __init__(
        self,
        round_number: int,
        snake: List[Tuple[int, int]],
        food: Optional[Tuple[int, int]],
        direction: str,
        pending_direction: str,
        score: int,
        high_score: int,
        speed: int,
        status: GameStatus,
        width: int,
        height: int,
        end_reason: Optional[str] = None,
    ):
        self.round_number = round_number
        self.snake = snake
        self.food = food
        self.direction = direction
        self.pending_direction = pending_direction
        self.score = score
        self.high_score = high_score
        self.speed = speed
        self.status = status
        self.width = width
        self.height = height
        self.end_reason = end_reason

    @property
    def head(self) -> Optional[Tuple[int, int]]:
        return self.snake[0] if self.snake else None

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        H = snake head
        S = snake body
        Row 0 is printed first (top of the screen), x-axis labels at the bottom.
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        if self.food is not None:
            fx, fy = self.food
            board[fy][fx] = 'F'

        for pos_idx, (x, y) in enumerate(self.snake):
            board[y][x] = 'H' if pos_idx == 0 else 'S'

        result = [f"{y:2d} {' '.join(board[y])}" for y in range(self.height)]
        # Only the last digit fits in a single-character column
        result.append("   " + " ".join(str(i % 10) for i in range(self.width)))

        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        """
        JSON-friendly representation. Tuples become lists when dumped,
        which is how replay files store positions.
        """
        return {
            "round_number": self.round_number,
            "snake": [list(p) for p in self.snake],
            "food": list(self.food) if self.food is not None else None,
            "direction": self.direction,
            "pending_direction": self.pending_direction,
            "score": self.score,
            "high_score": self.high_score,
            "speed": self.speed,
            "status": self.status.value,
            "width": self.width,
            "height": self.height,
            "end_reason": self.end_reason,
        }

    def __repr__(self):
        return (
            f"<GameState round={self.round_number}, status={self.status.value}, "
            f"length={len(self.snake)}, food={self.food}, score={self.score}>"
        )
