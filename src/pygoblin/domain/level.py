from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from pygoblin.domain.cell import Cell
from pygoblin.domain.exceptions import GenerationFailure
from pygoblin.domain.game_state import Position
from pygoblin.domain.grid import Grid
from pygoblin.domain.rng import RandomSource, pick_index
from pygoblin.domain.settings import COLLECTIBLES_PER_LEVEL, DEFAULT_ATTEMPTS_PER_CELL, Difficulty

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LevelLayout:
    avatar: Position
    obstacles: int


def obstacle_count(difficulty: Difficulty, level: int) -> int:
    """Obstacles on the `level`-th level of a game (1-based)."""
    return difficulty.base + difficulty.per_level * max(level - 1, 0)


def build_level(
    grid: Grid,
    *,
    level: int,
    difficulty: Difficulty,
    rng: RandomSource,
    attempts_per_cell: int = DEFAULT_ATTEMPTS_PER_CELL,
) -> LevelLayout:
    """
    Lay out a fresh level on `grid` by rejection sampling.

    Borders go down both side columns, then obstacles, then the collectibles,
    then the goblin somewhere on the bottom row. Each single placement gets
    `attempts_per_cell * interior cells` draws; running out raises
    GenerationFailure and leaves the grid half built.
    """
    grid.stamp_borders()
    grid.fill_interior(Cell.EMPTY)

    budget = attempts_per_cell * grid.interior_cells()
    wanted = obstacle_count(difficulty, level)

    _place(grid, rng, what="obstacle", cell=Cell.OBSTACLE, count=wanted, fits=obstacle_fits, budget=budget)
    _place(
        grid,
        rng,
        what="collectible",
        cell=Cell.COLLECTIBLE,
        count=COLLECTIBLES_PER_LEVEL,
        fits=_is_empty,
        budget=budget,
    )
    avatar = _place_avatar(grid, rng, budget=budget)

    logger.debug(
        "level %d laid out on %dx%d: %d obstacles, %d collectibles, goblin at %s",
        level, grid.rows, grid.cols, wanted, COLLECTIBLES_PER_LEVEL, avatar,
    )
    return LevelLayout(avatar=avatar, obstacles=wanted)


def _place(
    grid: Grid,
    rng: RandomSource,
    *,
    what: str,
    cell: Cell,
    count: int,
    fits: Callable[[Grid, int, int], bool],
    budget: int,
) -> None:
    for n in range(count):
        for _ in range(budget):
            row, col = _draw_interior(grid, rng)
            if fits(grid, row, col):
                grid.set_cell(row, col, cell)
                break
        else:
            raise GenerationFailure(
                f"could not place {what} {n + 1} of {count} on a {grid.rows}x{grid.cols} grid "
                f"within {budget} attempts"
            )


def _place_avatar(grid: Grid, rng: RandomSource, *, budget: int) -> Position:
    row = grid.bottom_row
    for _ in range(budget):
        col = pick_index(rng, grid.cols - 2) + 1
        if _is_empty(grid, row, col):
            grid.set_cell(row, col, Cell.AVATAR)
            return Position(x=col, y=row)
    raise GenerationFailure(f"no free column for the goblin on the bottom row within {budget} attempts")


def _draw_interior(grid: Grid, rng: RandomSource) -> tuple[int, int]:
    row = pick_index(rng, grid.rows)
    col = pick_index(rng, grid.cols - 2) + 1
    return row, col


def _is_empty(grid: Grid, row: int, col: int) -> bool:
    return grid.cell_at(row, col) == Cell.EMPTY


def obstacle_fits(grid: Grid, row: int, col: int) -> bool:
    """
    True if an obstacle may go at (row, col).

    Within a row no run of three or more obstacles may form, and a pair may
    not sit against either border column, so there is always a way past.
    """
    if grid.cell_at(row, col) != Cell.EMPTY:
        return False

    left = _run_length(grid, row, col, -1)
    right = _run_length(grid, row, col, 1)
    run = left + 1 + right
    if run >= 3:
        return False
    if run == 2:
        first, last = col - left, col + right
        if first == grid.left_border + 1 or last == grid.right_border - 1:
            return False
    return True


def _run_length(grid: Grid, row: int, col: int, step: int) -> int:
    # Border columns end every run, so this never walks off the grid.
    n = 0
    c = col + step
    while grid.cell_at(row, c) == Cell.OBSTACLE:
        n += 1
        c += step
    return n
