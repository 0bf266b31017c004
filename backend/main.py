import os
import json
import time
import uuid
import random
import logging
import argparse
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Any

from config import EngineConfig, load_config
from domain.constants import GameStatus
from domain.engine import GameEngine
from domain.game_state import GameState
from players import AVAILABLE_PLAYERS, DEFAULT_PLAYER, Player, get_player_class

logger = logging.getLogger(__name__)

END_MAX_STEPS = "max_steps"


# -------------------------------
# Host driver
# -------------------------------

def run_simulation(
    engine: GameEngine,
    player: Player,
    max_steps: int = 1000,
    realtime: bool = False,
    sleep: Callable[[float], None] = time.sleep,
    replay_path: Optional[str] = None,
    game_id: Optional[str] = None,
    show_board: bool = False,
) -> Dict[str, Any]:
    """
    Plays one session on the given engine.

    The driver owns the cadence: after every step it re-reads engine.speed and,
    in realtime mode, waits that many milliseconds before the next tick.

    Args:
        engine: engine to drive; it is reset at the end so the high score carries
                over to the next session on the same engine
        player: autopilot choosing the direction before each tick
        max_steps: stop after this many ticks even if the snake is still alive
        realtime: sleep for the engine's speed between steps
        sleep: sleep function (injectable for tests)
        replay_path: if given, write every snapshot plus metadata there as JSON
        game_id: id recorded in the summary and replay (random if omitted)
        show_board: print the final board before the engine is reset

    Returns:
        A dictionary summarizing the session.
    """
    if max_steps <= 0:
        raise ValueError(f"max_steps must be positive, got {max_steps}")
    game_id = game_id or str(uuid.uuid4())
    start_time = time.time()

    engine.start()
    history: List[GameState] = [engine.get_current_state()]
    steps = 0
    food_eaten = 0

    while engine.status == GameStatus.RUNNING and steps < max_steps:
        engine.request_direction(player.get_move(engine.get_current_state()))
        result = engine.step()
        steps += 1
        history.append(engine.get_current_state())

        if result.ate_food:
            food_eaten += 1
            logger.info(f"Ate food at {result.head}: score {result.score}, speed {result.speed}ms")
        if result.collided:
            logger.info(f"Collided with own body at step {steps}")
        if result.board_full:
            logger.info("Board is full, nothing left to eat")

        if realtime and engine.status == GameStatus.RUNNING:
            sleep(engine.speed / 1000.0)

    final_state = engine.get_current_state()
    end_reason = engine.end_reason or END_MAX_STEPS

    if replay_path:
        save_replay(replay_path, history, {
            "game_id": game_id,
            "player": player.name,
            "start_time": datetime.fromtimestamp(start_time, tz=timezone.utc).isoformat(),
            "end_time": datetime.now(timezone.utc).isoformat(),
            "end_reason": end_reason,
            "final_score": final_state.score,
            "steps": steps,
        })

    if show_board:
        print("\n" + final_state.print_board() + "\n")

    engine.reset()

    summary = {
        "game_id": game_id,
        "player": player.name,
        "final_score": final_state.score,
        "high_score": engine.high_score,
        "food_eaten": food_eaten,
        "steps": steps,
        "final_length": len(final_state.snake),
        "final_speed": final_state.speed,
        "end_reason": end_reason,
    }
    logger.info(f"Game {game_id} finished: {end_reason}, score {final_state.score}")
    return summary


def save_replay(path: str, history: List[GameState], metadata: Dict[str, Any]) -> None:
    """
    Write a replay file: metadata plus one JSON dict per recorded tick.
    """
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    data = {
        "metadata": metadata,
        "rounds": [state.to_dict() for state in history],
    }
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    logger.info(f"Saved replay with {len(history)} rounds to {path}")


def build_config(args: argparse.Namespace, base: Optional[EngineConfig] = None) -> EngineConfig:
    """Overlay CLI flags on top of the environment config."""
    overrides = {}
    for field in ("width", "height", "initial_speed", "speed_decay", "speed_floor", "seed"):
        value = getattr(args, field, None)
        if value is not None:
            overrides[field] = value
    return replace(base or load_config(), **overrides)


def replay_path_for(base_path: Optional[str], index: int, games: int) -> Optional[str]:
    if not base_path or games == 1:
        return base_path
    root, ext = os.path.splitext(base_path)
    return f"{root}_{index + 1}{ext or '.json'}"


# -------------------------------
# Main Entry Point
# -------------------------------

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run headless snake games with an autopilot player."
    )
    parser.add_argument("--player", type=str, default=DEFAULT_PLAYER, choices=AVAILABLE_PLAYERS,
                        help="Autopilot that chooses the moves")
    parser.add_argument("--games", type=int, default=1,
                        help="Number of consecutive games on the same engine")
    parser.add_argument("--max-steps", dest="max_steps", type=int, default=1000,
                        help="Maximum number of ticks per game")
    parser.add_argument("--width", type=int, default=None,
                        help="Board width (overrides SNAKE_GRID_WIDTH)")
    parser.add_argument("--height", type=int, default=None,
                        help="Board height (overrides SNAKE_GRID_HEIGHT)")
    parser.add_argument("--initial-speed", dest="initial_speed", type=int, default=None,
                        help="Milliseconds between steps at the start of a game")
    parser.add_argument("--speed-decay", dest="speed_decay", type=float, default=None,
                        help="Speed multiplier applied each time food is eaten")
    parser.add_argument("--speed-floor", dest="speed_floor", type=int, default=None,
                        help="Minimum milliseconds between steps")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for food placement and the player")
    parser.add_argument("--realtime", action="store_true",
                        help="Sleep for the current speed between steps")
    parser.add_argument("--replay", type=str, default=None,
                        help="Write a JSON replay to this path")
    parser.add_argument("--show-board", dest="show_board", action="store_true",
                        help="Print the final board of each game")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> List[Dict[str, Any]]:
    args = parse_args(argv)
    config = build_config(args)

    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.games < 1:
        raise ValueError("At least one game must be requested.")

    engine = config.create_engine()
    player = get_player_class(args.player)(rng=random.Random(config.seed))

    results = []
    for index in range(args.games):
        summary = run_simulation(
            engine,
            player,
            max_steps=args.max_steps,
            realtime=args.realtime,
            replay_path=replay_path_for(args.replay, index, args.games),
            show_board=args.show_board,
        )
        results.append(summary)

    print("\nSimulation Result Summary:")
    print(json.dumps(results, indent=2))
    return results


if __name__ == "__main__":
    main()
