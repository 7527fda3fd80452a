from __future__ import annotations

import logging
import random
import threading
from typing import Protocol

import numpy as np

from pygoblin.domain.cell import Cell, TileSize
from pygoblin.domain.exceptions import GenerationFailure
from pygoblin.domain.game_state import MOVING_STATES, GameSession, GameState, Position
from pygoblin.domain.grid import Grid, GridSize
from pygoblin.domain.input_state import Move
from pygoblin.domain.level import build_level
from pygoblin.domain.presentation import RedrawRegion, full_region, redraw_region, title_text
from pygoblin.domain.rng import RandomSource
from pygoblin.domain.settings import Difficulty, GameSettings
from pygoblin.domain.timing import delay_for, difficulty_tier
from pygoblin.domain.world import World

logger = logging.getLogger(__name__)


class GameListener(Protocol):
    def state_changed(self, state: GameState) -> None:
        ...

    def region_changed(self, region: RedrawRegion) -> None:
        ...

    def title_changed(self, title: str) -> None:
        ...


class GameMachine:
    """
    Owns the session and the grid and decides what happens on each step.

    Every command and every step runs under one lock, so a ticking driver and
    an input handler on different threads never see a half-applied move.
    Commands that make no sense in the current state are ignored and return
    False.

    `grid` and `session` may be handed in to share them with the caller, for
    instance to stage a position between steps.
    """

    def __init__(
        self,
        *,
        settings: GameSettings | None = None,
        rng: RandomSource | None = None,
        world: World | None = None,
        grid: Grid | None = None,
        session: GameSession | None = None,
    ) -> None:
        self._settings = settings or GameSettings()
        self._rng = rng or random.Random()
        self._world = world or World()
        self._grid = grid if grid is not None else Grid(self._settings.grid_size)
        self._session = session if session is not None else GameSession(grid_size=self._settings.grid_size)
        self._lock = threading.RLock()
        self._listeners: list[GameListener] = []

    def subscribe(self, listener: GameListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    # ---------- Commands ----------

    def start_new_game(self) -> bool:
        with self._lock:
            if self._session.state is not GameState.GAME_OVER:
                return False
            self._session.reset()
            logger.info("new game on a %dx%d grid", self._grid.rows, self._grid.cols)
            self._announce(GameState.GAME_OVER)
            return True

    def enqueue_move(self, move: Move) -> bool:
        with self._lock:
            if self._session.state not in MOVING_STATES:
                return False
            self._session.input_queue.append(move)
            return True

    def step(self) -> GameState:
        """Advance the game by one transition and return the resulting state."""
        with self._lock:
            s = self._session
            before = s.state

            if before is GameState.BUILDING_LEVEL:
                self._build_level()
            elif before in MOVING_STATES:
                outcome = self._world.advance(self._grid, s)
                s.state = outcome.state
            elif before is GameState.AVATAR_DESTROYED:
                self._world.clear_impact(self._grid, s)
                s.state = GameState.GAME_OVER
                logger.info("game over: score %d at level %d", s.score, s.level)
            elif before is GameState.LEVEL_CLEARED:
                # Build on the next step so the cleared field stays up for one tick.
                s.state = GameState.BUILDING_LEVEL
            else:
                return before

            if s.state is not before:
                logger.debug("%s -> %s", before.value, s.state.value)
            self._announce(before)
            return s.state

    # ---------- Configuration (between games only) ----------

    def set_grid_size(self, size: GridSize) -> bool:
        with self._lock:
            if not self._idle("grid size"):
                return False
            self._settings = self._settings.with_grid_size(size)
            self._grid.resize(size)
            self._session.grid_size = size
            self._emit_region(full_region(self._grid.rows, self._grid.cols))
            return True

    def set_tile_size(self, size: TileSize) -> bool:
        with self._lock:
            if not self._idle("tile size"):
                return False
            self._settings = self._settings.with_tile_size(size)
            self._emit_region(full_region(self._grid.rows, self._grid.cols))
            return True

    def set_difficulty(self, difficulty: Difficulty | None) -> bool:
        with self._lock:
            if not self._idle("difficulty"):
                return False
            self._settings = self._settings.with_difficulty(difficulty)
            return True

    # ---------- Observers ----------

    @property
    def state(self) -> GameState:
        with self._lock:
            return self._session.state

    @property
    def score(self) -> int:
        with self._lock:
            return self._session.score

    @property
    def level(self) -> int:
        with self._lock:
            return self._session.level

    @property
    def difficulty_tier(self) -> int:
        with self._lock:
            return difficulty_tier(self._session.level)

    @property
    def avatar_current(self) -> Position:
        with self._lock:
            return self._session.avatar_current

    @property
    def avatar_previous(self) -> Position:
        with self._lock:
            return self._session.avatar_previous

    @property
    def is_game_over(self) -> bool:
        with self._lock:
            return self._session.state is GameState.GAME_OVER

    @property
    def grid_dimensions(self) -> tuple[int, int]:
        with self._lock:
            return self._grid.dimensions

    @property
    def settings(self) -> GameSettings:
        with self._lock:
            return self._settings

    @property
    def tile_size(self) -> TileSize:
        with self._lock:
            return self._settings.tile_size

    @property
    def queued_moves(self) -> int:
        with self._lock:
            return len(self._session.input_queue)

    @property
    def title(self) -> str:
        with self._lock:
            return title_text(self._session.state, self._session.score, self._session.level)

    def cell_at(self, row: int, col: int) -> Cell:
        with self._lock:
            return self._grid.cell_at(row, col)

    def snapshot(self) -> np.ndarray:
        with self._lock:
            return self._grid.snapshot()

    def requested_delay(self) -> int | None:
        with self._lock:
            return delay_for(self._session.state, self._session.level)

    # ---------- Internals ----------

    def _build_level(self) -> None:
        s = self._session
        number = s.level + 1
        try:
            layout = build_level(
                self._grid,
                level=number,
                difficulty=self._settings.effective_difficulty,
                rng=self._rng,
                attempts_per_cell=self._settings.attempts_per_cell,
            )
        except GenerationFailure:
            logger.exception("level %d could not be generated; ending the game", number)
            s.state = GameState.GAME_OVER
            self._emit_state(s.state)
            self._emit_title()
            self._emit_region(full_region(self._grid.rows, self._grid.cols))
            raise

        s.avatar_current = layout.avatar
        s.avatar_previous = layout.avatar
        s.impact = None
        s.level = number
        s.input_queue.clear()
        s.state = GameState.LEVEL_STARTING
        logger.info("level %d: %d obstacles", number, layout.obstacles)

    def _idle(self, what: str) -> bool:
        if self._session.state is GameState.GAME_OVER:
            return True
        logger.warning("ignoring %s change while a game is running", what)
        return False

    def _announce(self, before: GameState) -> None:
        s = self._session
        state = s.state
        if state is not before:
            self._emit_state(state)

        avatar = redraw_region(s.avatar_current, s.avatar_previous, self._grid.rows)
        whole = full_region(self._grid.rows, self._grid.cols)

        if state is GameState.LEVEL_STARTING:
            self._emit_title()
            self._emit_region(whole)
        elif state is GameState.LEVEL_RUNNING:
            self._emit_region(avatar)
        elif state in (GameState.AVATAR_SCORED, GameState.LEVEL_CLEARED):
            self._emit_title()
            self._emit_region(avatar)
        elif state is GameState.AVATAR_DESTROYED:
            # Every remaining collectible changed, not just the goblin's cells.
            self._emit_region(whole)
        elif state is GameState.GAME_OVER:
            self._emit_title()
            self._emit_region(avatar)

    def _emit_state(self, state: GameState) -> None:
        for listener in self._listeners:
            listener.state_changed(state)

    def _emit_title(self) -> None:
        title = self.title
        for listener in self._listeners:
            listener.title_changed(title)

    def _emit_region(self, region: RedrawRegion) -> None:
        for listener in self._listeners:
            listener.region_changed(region)
