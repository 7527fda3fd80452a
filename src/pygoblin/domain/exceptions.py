class GenerationFailure(Exception):
    """Raised when a level could not be laid out within the retry budget."""


class OutOfBounds(IndexError):
    """Raised when a grid position lies outside the active rows/cols."""


class InvalidSetting(ValueError):
    """Raised for grid, tile or difficulty values the game does not support."""
