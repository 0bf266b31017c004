"""
Registry for autopilot players.

Maps player keys (e.g. 'random', 'greedy') to player classes. To add a new
player, create a module with a Player subclass, import it here, and add an
entry to PLAYER_CLASSES.
"""

from typing import Dict, List, Optional, Type

from .base import Player
from .greedy_player import GreedyPlayer
from .random_player import RandomPlayer

DEFAULT_PLAYER = "greedy"

PLAYER_CLASSES: Dict[str, Type[Player]] = {
    "random": RandomPlayer,
    "greedy": GreedyPlayer,
}

# Canonical list of available player keys (for CLI choices)
AVAILABLE_PLAYERS = list(PLAYER_CLASSES.keys())


def get_player_class(player_key: Optional[str] = None) -> Type[Player]:
    """
    Look up a player class by key. Keys are case-insensitive and surrounding
    whitespace is ignored; a missing or blank key selects DEFAULT_PLAYER.

    Raises:
        ValueError: If player_key names no registered player.
    """
    key = (player_key or "").strip().lower() or DEFAULT_PLAYER
    try:
        return PLAYER_CLASSES[key]
    except KeyError:
        raise ValueError(
            f"Unknown player '{key}'. Choose one of: {', '.join(AVAILABLE_PLAYERS)}"
        ) from None


def list_players() -> List[dict]:
    """
    Return metadata about all available players.

    Returns:
        List of dicts with 'key' and 'description' for each player.
    """
    return [
        {"key": "random", "description": "Random safe moves, never reverses or hits its own body"},
        {"key": "greedy", "description": "Chases the food along the shortest wrapped distance"},
    ]
