"""
Greedy player implementation - heads for the food along the shortest
wrapped distance.
"""

from typing import Tuple

from domain.game_state import GameState
from .random_player import RandomPlayer


def wrapped_distance(a: Tuple[int, int], b: Tuple[int, int], width: int, height: int) -> int:
    """Manhattan distance on a board whose edges wrap around."""
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return min(dx, width - dx) + min(dy, height - dy)


class GreedyPlayer(RandomPlayer):
    """
    Picks the safe move that brings the head closest to the food.
    Ties are broken in favour of keeping the current heading, then randomly.
    Without food on the board it behaves like RandomPlayer.
    """

    name = "greedy"

    def get_move(self, game_state: GameState) -> str:
        valid_moves = self.safe_moves(game_state)
        if not valid_moves:
            return game_state.direction
        if game_state.food is None:
            return self.rng.choice(valid_moves)

        distances = {
            move: wrapped_distance(
                self.next_cell(game_state, move),
                game_state.food,
                game_state.width,
                game_state.height,
            )
            for move in valid_moves
        }
        best = min(distances.values())
        candidates = [move for move, d in distances.items() if d == best]

        if game_state.direction in candidates:
            return game_state.direction
        return self.rng.choice(candidates)
