from __future__ import annotations

import random

import pytest

from pygoblin.app.game_machine import GameMachine
from pygoblin.domain.cell import Cell
from pygoblin.domain.game_state import GameSession, GameState, Position
from pygoblin.domain.grid import Grid, GridSize
from pygoblin.domain.presentation import RedrawRegion


class RecordingListener:
    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def state_changed(self, state: GameState) -> None:
        self.events.append(("state", state))

    def region_changed(self, region: RedrawRegion) -> None:
        self.events.append(("region", region))

    def title_changed(self, title: str) -> None:
        self.events.append(("title", title))

    def of(self, kind: str) -> list[object]:
        return [payload for k, payload in self.events if k == kind]


class FakeRoot:
    """Just enough of tk.Tk for the loop, the input mapper and the app."""

    def __init__(self) -> None:
        self.bindings: dict[str, object] = {}
        self.pending: dict[str, tuple[int, object]] = {}
        self.cancelled: list[str] = []
        self.titles: list[str] = []
        self.protocols: dict[str, object] = {}
        self.focused = False
        self.destroyed = False
        self._next_id = 0

    def after(self, ms: int, fn) -> str:
        self._next_id += 1
        after_id = f"after#{self._next_id}"
        self.pending[after_id] = (ms, fn)
        return after_id

    def after_cancel(self, after_id: str) -> None:
        self.cancelled.append(after_id)
        self.pending.pop(after_id, None)

    def bind(self, sequence: str, fn) -> None:
        self.bindings[sequence] = fn

    def focus_set(self) -> None:
        self.focused = True

    def title(self, text: str | None = None) -> str:
        if text is not None:
            self.titles.append(text)
        return self.titles[-1] if self.titles else ""

    def protocol(self, name: str, fn) -> None:
        self.protocols[name] = fn

    def mainloop(self) -> None:
        pass

    def destroy(self) -> None:
        self.destroyed = True

    def press(self, sequence: str) -> None:
        self.bindings[sequence](None)

    def run_pending(self, times: int = 1) -> None:
        """Fire the scheduled after() callbacks, one generation at a time."""
        for _ in range(times):
            due = list(self.pending.items())
            self.pending.clear()
            for _after_id, (_ms, fn) in due:
                fn()


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture()
def fake_root() -> FakeRoot:
    return FakeRoot()


@pytest.fixture()
def field() -> Grid:
    """Medium grid with borders and an empty interior."""
    grid = Grid(GridSize.MEDIUM)
    grid.stamp_borders()
    grid.fill_interior(Cell.EMPTY)
    return grid


@pytest.fixture()
def board() -> Grid:
    """The grid the `started` machine plays on."""
    return Grid(GridSize.MEDIUM)


@pytest.fixture()
def session() -> GameSession:
    """The session the `started` machine plays."""
    return GameSession(grid_size=GridSize.MEDIUM)


@pytest.fixture()
def started(rng: random.Random, board: Grid, session: GameSession) -> GameMachine:
    """Machine with level 1 built and waiting for its first move."""
    machine = GameMachine(rng=rng, grid=board, session=session)
    machine.start_new_game()
    machine.step()
    return machine


@pytest.fixture()
def clear_field(board: Grid, session: GameSession):
    """Wipe the current level down to borders plus the goblin at (x, y)."""

    def clear(x: int, y: int) -> None:
        board.fill_interior(Cell.EMPTY)
        board.set_cell(y, x, Cell.AVATAR)
        session.avatar_current = Position(x, y)
        session.avatar_previous = Position(x, y)

    return clear
