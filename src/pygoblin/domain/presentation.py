from __future__ import annotations

from dataclasses import dataclass

from pygoblin.domain.game_state import GameState, Position

GAME_NAME = "Goblin"


@dataclass(frozen=True)
class RedrawRegion:
    """Rectangle of cells the shell has to repaint. Multiply by tile size for pixels."""
    col: int
    row: int
    width: int
    height: int


def title_text(state: GameState, score: int, level: int) -> str:
    title = f"{GAME_NAME} -- Score: {score}  Level: {level}"
    if state is GameState.GAME_OVER:
        title += " -- GAME OVER"
    return title


def full_region(rows: int, cols: int) -> RedrawRegion:
    return RedrawRegion(col=0, row=0, width=cols, height=rows)


def redraw_region(current: Position, previous: Position, rows: int) -> RedrawRegion:
    """
    Smallest rectangle covering the goblin's old and new cells.

    After a normal climb the new cell sits one row above the old one. After
    wrapping from row 0 to the bottom the two cells are a whole column apart,
    so the full height is returned.
    """
    if previous.y != 0:
        row, height = current.y, 2
    else:
        row, height = 0, rows

    if current.x != previous.x:
        col, width = min(current.x, previous.x), 2
    else:
        col, width = current.x, 1

    return RedrawRegion(col=col, row=row, width=width, height=height)
