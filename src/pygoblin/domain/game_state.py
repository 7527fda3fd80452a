from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum

from pygoblin.domain.grid import GridSize
from pygoblin.domain.input_state import Move


class GameState(Enum):
    BUILDING_LEVEL = "building_level"
    LEVEL_STARTING = "level_starting"
    LEVEL_RUNNING = "level_running"
    AVATAR_SCORED = "avatar_scored"
    AVATAR_DESTROYED = "avatar_destroyed"
    LEVEL_CLEARED = "level_cleared"
    GAME_OVER = "game_over"


# States in which the goblin is on the field and takes moves.
MOVING_STATES = frozenset({GameState.LEVEL_STARTING, GameState.LEVEL_RUNNING, GameState.AVATAR_SCORED})


class Outcome(Enum):
    RUNNING = "running"
    SCORED = "scored"
    CLEARED = "cleared"
    DESTROYED = "destroyed"

    @property
    def state(self) -> GameState:
        return _OUTCOME_STATE[self]


_OUTCOME_STATE = {
    Outcome.RUNNING: GameState.LEVEL_RUNNING,
    Outcome.SCORED: GameState.AVATAR_SCORED,
    Outcome.CLEARED: GameState.LEVEL_CLEARED,
    Outcome.DESTROYED: GameState.AVATAR_DESTROYED,
}


@dataclass(frozen=True)
class Position:
    x: int  # column
    y: int  # row, 0 at the top


@dataclass
class GameSession:
    state: GameState = GameState.GAME_OVER
    level: int = 0
    score: int = 0
    avatar_current: Position = Position(0, 0)
    avatar_previous: Position = Position(0, 0)
    impact: Position | None = None
    input_queue: deque[Move] = field(default_factory=deque)
    grid_size: GridSize = GridSize.MEDIUM

    def reset(self) -> None:
        self.score = 0
        self.level = 0
        self.impact = None
        self.input_queue.clear()
        self.state = GameState.BUILDING_LEVEL
