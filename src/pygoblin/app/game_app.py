from __future__ import annotations

import logging
import random
import tkinter as tk

from pygoblin.app.game_loop import GameLoop
from pygoblin.app.game_machine import GameMachine
from pygoblin.app.scheduler import TickScheduler
from pygoblin.domain.exceptions import GenerationFailure
from pygoblin.domain.game_state import GameState
from pygoblin.domain.presentation import GAME_NAME, RedrawRegion
from pygoblin.domain.settings import GameSettings
from pygoblin.ui.input_mapper import TkInputMapper

logger = logging.getLogger(__name__)


class GameApp:
    """
    Thin tkinter shell around the game machine.

    Keys and the loop both run on the tk event queue, so ticks and moves are
    applied one at a time. Drawing the field is left to whoever subscribes to
    the machine; this shell only keeps the window title current.
    """

    def __init__(
        self,
        *,
        root: tk.Misc | None = None,
        settings: GameSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.root = root if root is not None else tk.Tk()

        self.machine = GameMachine(settings=settings, rng=rng or random.Random())
        self.machine.subscribe(self)
        self.scheduler = TickScheduler(self.machine)

        self.input = TkInputMapper(
            self.root,
            on_move=self.machine.enqueue_move,
            on_new_game=self.new_game,
        )

        self.loop = GameLoop(root=self.root, tick_fn=self._tick)
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

        self.root.title(self.machine.title)

    def run(self) -> None:
        self.loop.start()
        self.root.mainloop()

    def new_game(self) -> bool:
        """Start a game and build its first level at once."""
        try:
            return self.scheduler.start_new_game(immediate=True)
        except GenerationFailure as e:
            self._report(e)
            return False

    # ---------- GameListener ----------

    def state_changed(self, state: GameState) -> None:
        logger.debug("state now %s", state.value)

    def region_changed(self, region: RedrawRegion) -> None:
        # Nothing is drawn here; a view would repaint this block of cells.
        pass

    def title_changed(self, title: str) -> None:
        self.root.title(title)

    # ---------- Loop ----------

    def _tick(self) -> None:
        try:
            self.scheduler.tick()
        except GenerationFailure as e:
            self._report(e)

    def _report(self, failure: GenerationFailure) -> None:
        # The machine already fell back to game over; say why and carry on.
        self.root.title(f"{GAME_NAME} -- {failure}")

    def _on_close(self) -> None:
        self.loop.stop()
        self.root.destroy()
