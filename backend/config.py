"""
Engine configuration loaded from the environment.

Values come from environment variables (or a local .env file) and fall back
to the defaults in domain.constants. CLI flags in main.py override these.
"""

import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from dotenv import load_dotenv

from domain.constants import (
    DEFAULT_HEIGHT,
    DEFAULT_INITIAL_SPEED,
    DEFAULT_SPEED_DECAY,
    DEFAULT_SPEED_FLOOR,
    DEFAULT_WIDTH,
)
from domain.engine import GameEngine

load_dotenv()


@dataclass
class EngineConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    initial_speed: int = DEFAULT_INITIAL_SPEED
    speed_decay: float = DEFAULT_SPEED_DECAY
    speed_floor: int = DEFAULT_SPEED_FLOOR
    seed: Optional[int] = None
    log_level: str = "INFO"

    def create_engine(self) -> GameEngine:
        return GameEngine(
            width=self.width,
            height=self.height,
            initial_speed=self.initial_speed,
            speed_decay=self.speed_decay,
            speed_floor=self.speed_floor,
            seed=self.seed,
        )


def _read(env: Mapping[str, str], name: str, cast: Callable, default):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from None


def load_config(env: Optional[Mapping[str, str]] = None) -> EngineConfig:
    """
    Build an EngineConfig from environment variables.

    Args:
        env: mapping to read from; defaults to os.environ

    Raises:
        ValueError: if a variable is set but cannot be parsed
    """
    if env is None:
        env = os.environ

    return EngineConfig(
        width=_read(env, "SNAKE_GRID_WIDTH", int, DEFAULT_WIDTH),
        height=_read(env, "SNAKE_GRID_HEIGHT", int, DEFAULT_HEIGHT),
        initial_speed=_read(env, "SNAKE_INITIAL_SPEED_MS", int, DEFAULT_INITIAL_SPEED),
        speed_decay=_read(env, "SNAKE_SPEED_DECAY", float, DEFAULT_SPEED_DECAY),
        speed_floor=_read(env, "SNAKE_SPEED_FLOOR_MS", int, DEFAULT_SPEED_FLOOR),
        seed=_read(env, "SNAKE_SEED", int, None),
        log_level=_read(env, "SNAKE_LOG_LEVEL", str.upper, "INFO"),
    )
