from __future__ import annotations

import tkinter as tk
from collections.abc import Callable

from pygoblin.domain.timing import BASE_TICK


class GameLoop:
    """Calls `tick_fn` every `interval_ms` on the tk event queue."""

    def __init__(
        self,
        *,
        root: tk.Misc,
        tick_fn: Callable[[], None],
        interval_ms: int = BASE_TICK,
    ) -> None:
        self._root = root
        self._tick_fn = tick_fn
        self._interval_ms = max(1, int(interval_ms))

        self._running = False
        self._after_id: str | None = None

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._schedule_next()

    def stop(self) -> None:
        self._running = False
        if self._after_id is not None:
            try:
                self._root.after_cancel(self._after_id)
            except tk.TclError:
                # Root may already be destroyed; ignore during shutdown.
                pass
            finally:
                self._after_id = None

    def _schedule_next(self) -> None:
        self._after_id = self._root.after(self._interval_ms, self._tick)

    def _tick(self) -> None:
        if not self._running:
            return

        try:
            self._tick_fn()
        except Exception:
            # Fail fast rather than keep ticking a corrupt game.
            self.stop()
            raise

        self._schedule_next()
