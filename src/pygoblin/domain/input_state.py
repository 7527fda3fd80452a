from enum import Enum


class Move(Enum):
    LEFT = -1
    RIGHT = 1

    @property
    def dx(self) -> int:
        return self.value
