from __future__ import annotations

from pygoblin.domain.game_state import GameState


BASE_TICK = 10             # time units between scheduler ticks
START_DELAY = 100          # new game requested -> first level built
LEVEL_PREP_DELAY = 3000    # level drawn -> first goblin move
IMPACT_DELAY = 1000        # explosion stays visible this long

# Delay between goblin moves for levels 1..4; the last entry covers 5 and up.
TIER_DELAYS = (400, 330, 250, 170, 80)


def difficulty_tier(level: int) -> int:
    return min(max(level, 1), len(TIER_DELAYS))


def tier_delay(level: int) -> int:
    return TIER_DELAYS[difficulty_tier(level) - 1]


def delay_for(state: GameState, level: int) -> int | None:
    """How long the scheduler waits in `state` before the next step; None stops it."""
    if state is GameState.LEVEL_STARTING:
        return LEVEL_PREP_DELAY
    if state in (GameState.LEVEL_RUNNING, GameState.AVATAR_SCORED, GameState.LEVEL_CLEARED):
        return tier_delay(level)
    if state is GameState.BUILDING_LEVEL:
        return tier_delay(level) if level > 0 else START_DELAY
    if state is GameState.AVATAR_DESTROYED:
        return IMPACT_DELAY
    return None
