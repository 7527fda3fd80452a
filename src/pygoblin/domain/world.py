from __future__ import annotations

from pygoblin.domain.cell import Cell
from pygoblin.domain.game_state import GameSession, Outcome, Position
from pygoblin.domain.grid import Grid
from pygoblin.domain.settings import COLLECTIBLES_PER_LEVEL


class World:
    def advance(self, grid: Grid, session: GameSession) -> Outcome:
        """Move the goblin one row up, plus one queued sideways step if any."""
        prev = session.avatar_current
        grid.set_cell(prev.y, prev.x, Cell.EMPTY)
        session.avatar_previous = prev

        # ----- Ascend, recycling from the top row to the bottom -----
        y = grid.bottom_row if prev.y == 0 else prev.y - 1

        # ----- One queued move per step, oldest first -----
        x = prev.x
        if session.input_queue:
            x += session.input_queue.popleft().dx

        # ----- Resolve the destination -----
        content = grid.cell_at(y, x)
        if content == Cell.BORDER:
            # Sideways into the shrubs is refused. The goblin lands straight
            # up whatever is there.
            dest = Position(x=prev.x, y=y)
            grid.set_cell(dest.y, dest.x, Cell.AVATAR)
            session.avatar_current = dest
            return Outcome.RUNNING

        dest = Position(x=x, y=y)
        session.avatar_current = dest

        if content == Cell.OBSTACLE:
            grid.set_cell(y, x, Cell.IMPACT_MARK)
            grid.replace_all(Cell.COLLECTIBLE, Cell.COLLECTED)
            session.impact = dest
            return Outcome.DESTROYED

        grid.set_cell(y, x, Cell.AVATAR)
        if content == Cell.COLLECTIBLE:
            session.score += 1
            if session.score % COLLECTIBLES_PER_LEVEL == 0:
                return Outcome.CLEARED
            return Outcome.SCORED
        return Outcome.RUNNING

    def clear_impact(self, grid: Grid, session: GameSession) -> None:
        if session.impact is None:
            return
        grid.set_cell(session.impact.y, session.impact.x, Cell.EMPTY)
        session.impact = None
