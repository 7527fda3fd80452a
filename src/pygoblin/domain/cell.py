from __future__ import annotations

from enum import Enum, IntEnum


class Cell(IntEnum):
    """What occupies a grid position. Stored as small ints in the grid array."""
    EMPTY = 0
    BORDER = 1       # shrubs down both side columns
    OBSTACLE = 2     # brick wall
    COLLECTIBLE = 3  # shocked face
    COLLECTED = 4    # happy face, shown once the goblin is destroyed
    AVATAR = 5
    IMPACT_MARK = 6  # explosion


class TileSize(Enum):
    # Edge length in pixels. Only the shell cares; the rules never read it.
    SMALL = 16
    MEDIUM = 24
    LARGE = 32
