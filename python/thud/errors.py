"""Error kinds raised by the Thud engine."""

from __future__ import annotations


class ThudError(Exception):
    pass


class OutOfBounds(ThudError, ValueError):
    """Coordinate outside the playable octagon."""


class InvalidDirection(ThudError, ValueError):
    """Direction ordinal that is not one of the 8 compass slots."""


class WrongTurn(ThudError):
    """Action attempted for the side that is not to move."""


class IllegalMove(ThudError):
    """Action breaks shape, occupancy, path or adjacency rules."""


class GameOver(ThudError):
    """Mutating action attempted after the game has ended."""
