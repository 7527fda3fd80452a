from __future__ import annotations

from dataclasses import dataclass, replace

from pygoblin.domain.cell import TileSize
from pygoblin.domain.exceptions import InvalidSetting
from pygoblin.domain.grid import GridSize


COLLECTIBLES_PER_LEVEL = 10
DEFAULT_ATTEMPTS_PER_CELL = 64


@dataclass(frozen=True)
class Difficulty:
    base: int       # obstacles on the first level
    per_level: int  # extra obstacles for every level after that

    def __post_init__(self) -> None:
        if self.base < 0 or self.per_level < 0:
            raise InvalidSetting("difficulty values must be >= 0")


_DEFAULT_DIFFICULTY = {
    GridSize.SMALL: Difficulty(base=17, per_level=3),
    GridSize.MEDIUM: Difficulty(base=38, per_level=7),
    GridSize.LARGE: Difficulty(base=67, per_level=13),
}


def default_difficulty(size: GridSize) -> Difficulty:
    return _DEFAULT_DIFFICULTY[size]


@dataclass(frozen=True)
class GameSettings:
    grid_size: GridSize = GridSize.MEDIUM
    tile_size: TileSize = TileSize.MEDIUM
    difficulty: Difficulty | None = None  # None -> the grid size's default
    attempts_per_cell: int = DEFAULT_ATTEMPTS_PER_CELL

    def __post_init__(self) -> None:
        if not isinstance(self.grid_size, GridSize):
            raise InvalidSetting(f"unsupported grid size: {self.grid_size!r}")
        if not isinstance(self.tile_size, TileSize):
            raise InvalidSetting(f"unsupported tile size: {self.tile_size!r}")
        if self.attempts_per_cell <= 0:
            raise InvalidSetting("attempts_per_cell must be > 0")

    @property
    def effective_difficulty(self) -> Difficulty:
        return self.difficulty or default_difficulty(self.grid_size)

    def with_grid_size(self, size: GridSize) -> GameSettings:
        # Picking a new field size brings back that size's stock difficulty.
        return replace(self, grid_size=size, difficulty=None)

    def with_tile_size(self, size: TileSize) -> GameSettings:
        return replace(self, tile_size=size)

    def with_difficulty(self, difficulty: Difficulty | None) -> GameSettings:
        return replace(self, difficulty=difficulty)
