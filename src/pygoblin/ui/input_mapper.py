from __future__ import annotations
import tkinter as tk
from collections.abc import Callable
from pygoblin.domain.input_state import Move

LEFT_KEYS = ("<KeyPress-a>", "<KeyPress-A>", "<KeyPress-Left>")
RIGHT_KEYS = ("<KeyPress-l>", "<KeyPress-L>", "<KeyPress-Right>")
NEW_GAME_KEYS = ("<KeyPress-Return>",)


class TkInputMapper:
    def __init__(
        self,
        root: tk.Misc,
        *,
        on_move: Callable[[Move], object],
        on_new_game: Callable[[], object],
    ) -> None:
        self._on_move = on_move
        self._on_new_game = on_new_game

        for seq in LEFT_KEYS:
            root.bind(seq, self._on_left)
        for seq in RIGHT_KEYS:
            root.bind(seq, self._on_right)
        for seq in NEW_GAME_KEYS:
            root.bind(seq, self._on_return)

        # Helps ensure root gets key events.
        root.focus_set()

    def _on_left(self, _evt: tk.Event) -> None:
        self._on_move(Move.LEFT)

    def _on_right(self, _evt: tk.Event) -> None:
        self._on_move(Move.RIGHT)

    def _on_return(self, _evt: tk.Event) -> None:
        # The machine ignores this unless the game is over.
        self._on_new_game()
