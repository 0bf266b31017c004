"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Iterable, List, Optional, Tuple

Position = Tuple[int, int]


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end.
                   Empty until a game is started.
    """

    def __init__(self, positions: Optional[Iterable[Position]] = None):
        self.positions = deque(positions or [])
        if len(set(self.positions)) != len(self.positions):
            raise ValueError(f"Snake segments overlap: {list(self.positions)}")

    @property
    def head(self) -> Position:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Position:
        return self.positions[-1]

    def occupies(self, cell: Position) -> bool:
        return cell in self.positions

    def advance(self, new_head: Position, grow: bool = False) -> None:
        """Push a new head; the tail follows one step behind unless growing."""
        self.positions.appendleft(new_head)
        if not grow:
            self.positions.pop()

    def as_list(self) -> List[Position]:
        return list(self.positions)

    def __len__(self) -> int:
        return len(self.positions)

    def __bool__(self) -> bool:
        return bool(self.positions)

    def __repr__(self):
        return f"<Snake length={len(self.positions)}, head={self.positions[0] if self.positions else None}>"
