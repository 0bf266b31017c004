"""
Base player interface for driving the engine headlessly.
"""

from typing import List, Tuple

from domain.constants import DIRECTION_VECTORS, OPPOSITES, VALID_MOVES
from domain.game_state import GameState


class Player:
    """
    Base class/interface for autopilot logic.

    A player stands in for the input layer: given a snapshot of the game it
    returns the direction it wants the engine to turn to next.
    """

    name = "base"

    def get_move(self, game_state: GameState) -> str:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of: "UP", "DOWN", "LEFT", "RIGHT"
        """
        raise NotImplementedError

    @staticmethod
    def next_cell(game_state: GameState, move: str) -> Tuple[int, int]:
        """Cell the head would enter on the wrapping board."""
        hx, hy = game_state.head
        dx, dy = DIRECTION_VECTORS[move]
        return ((hx + dx) % game_state.width, (hy + dy) % game_state.height)

    def safe_moves(self, game_state: GameState) -> List[str]:
        """
        Moves that neither reverse the snake nor run into any segment.
        The tail counts as occupied: the engine treats entering it as a
        collision even though it would move away this tick.
        """
        body = set(game_state.snake)
        reverse = OPPOSITES[game_state.direction]
        return [
            move for move in sorted(VALID_MOVES)
            if move != reverse and self.next_cell(game_state, move) not in body
        ]
