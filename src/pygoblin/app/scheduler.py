from __future__ import annotations

from pygoblin.app.game_machine import GameMachine
from pygoblin.domain.timing import BASE_TICK


class TickScheduler:
    """
    Turns a steady stream of base ticks into state-dependent step delays.

    Each tick adds to an accumulator; once it reaches the armed trigger the
    machine steps, the accumulator restarts at zero and the trigger is re-armed
    from the state the step left behind. With no trigger armed (game over)
    ticks are dropped until a new game is started through this scheduler.
    """

    def __init__(self, machine: GameMachine, *, base_tick: int = BASE_TICK) -> None:
        if base_tick <= 0:
            raise ValueError("base_tick must be > 0")
        self._machine = machine
        self._base_tick = base_tick
        self._elapsed = 0
        self._trigger: int | None = machine.requested_delay()

    @property
    def base_tick(self) -> int:
        return self._base_tick

    @property
    def elapsed(self) -> int:
        return self._elapsed

    @property
    def trigger(self) -> int | None:
        return self._trigger

    @property
    def armed(self) -> bool:
        return self._trigger is not None

    def tick(self, elapsed: int | None = None) -> bool:
        """Account for one base tick, or `elapsed` time units. True if the machine stepped."""
        if self._trigger is None:
            return False

        self._elapsed += self._base_tick if elapsed is None else elapsed
        if self._elapsed < self._trigger:
            return False

        self._fire()
        return True

    def start_new_game(self, *, immediate: bool = False) -> bool:
        """
        Start a game from game over.

        By default the first level is built after the short quick-start
        delay. With `immediate` it is built right away and the level-start
        delay is armed, the way a key press starts the game.
        """
        if not self._machine.start_new_game():
            return False
        if immediate:
            self._fire()
        else:
            self.rearm()
        return True

    def rearm(self) -> None:
        self._elapsed = 0
        self._trigger = self._machine.requested_delay()

    def _fire(self) -> None:
        self._elapsed = 0
        try:
            self._machine.step()
        finally:
            # Re-arm even if the step raised.
            self._trigger = self._machine.requested_delay()
