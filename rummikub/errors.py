class InvalidTile(ValueError):
    """Raised when a tile has an unknown color or a rank outside the game's range."""


class HandTooLarge(ValueError):
    """Raised when a hand is too large to enumerate every subset of it."""
