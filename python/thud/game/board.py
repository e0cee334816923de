from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Mapping

from ..geometry import BOARD_SIZE, CENTRE, CORNER_CUT, Coordinate, all_coordinates


STARTING_DWARFS = 32
STARTING_TROLLS = 8


class Piece(Enum):
    EMPTY = "empty"
    DWARF = "dwarf"
    TROLL = "troll"
    THUDSTONE = "thudstone"

    @property
    def code(self) -> int:
        return _PIECE_CODES[self]


_PIECE_CODES: Dict[Piece, int] = {
    Piece.EMPTY: 0,
    Piece.DWARF: 1,
    Piece.TROLL: 2,
    Piece.THUDSTONE: 3,
}


class Player(Enum):
    DWARF = "dwarf"
    TROLL = "troll"

    @property
    def piece(self) -> Piece:
        return Piece.DWARF if self is Player.DWARF else Piece.TROLL


# Flip between players
def opponent(player: Player) -> Player:
    return Player.TROLL if player is Player.DWARF else Player.DWARF


CENTRE_COORD = Coordinate.zero_based(*CENTRE)


def _is_dwarf_start(coord: Coordinate) -> bool:
    # Straight edges hold Dwarfs everywhere except their middle cell
    edge = BOARD_SIZE - 1
    if coord.x in (0, edge):
        return coord.y != CENTRE[1]
    if coord.y in (0, edge):
        return coord.x != CENTRE[0]
    # Diagonal edges are the innermost cells the corner cut allows
    return min(coord.x, edge - coord.x) + min(coord.y, edge - coord.y) == CORNER_CUT


class Board:
    """Dense piece assignment for every cell of the octagon.

    Storage is a flat list indexed by :attr:`Coordinate.index`; off-board
    slots stay ``Piece.EMPTY`` and are never reachable through a validated
    coordinate.
    """

    def __init__(self) -> None:
        self._cells: List[Piece] = [Piece.EMPTY] * (BOARD_SIZE * BOARD_SIZE)
        self._cells[CENTRE_COORD.index] = Piece.THUDSTONE

    @classmethod
    def standard(cls) -> "Board":
        board = cls()
        for coord in all_coordinates():
            if _is_dwarf_start(coord):
                board._place(coord, Piece.DWARF)
        for _, coord in CENTRE_COORD.neighbours():
            board._place(coord, Piece.TROLL)
        return board

    @classmethod
    def from_pieces(cls, pieces: Mapping[Coordinate, Piece]) -> "Board":
        """Build a custom position; the Thudstone is always added at the centre."""

        board = cls()
        for coord, piece in pieces.items():
            if piece is Piece.THUDSTONE:
                raise ValueError("The Thudstone is fixed at the centre and cannot be placed")
            if coord == CENTRE_COORD:
                raise ValueError("The centre cell is reserved for the Thudstone")
            if piece is not Piece.EMPTY:
                board._place(coord, piece)

        if board.count(Piece.DWARF) > STARTING_DWARFS:
            raise ValueError(f"At most {STARTING_DWARFS} Dwarfs may be on the board")
        if board.count(Piece.TROLL) > STARTING_TROLLS:
            raise ValueError(f"At most {STARTING_TROLLS} Trolls may be on the board")
        return board

    def copy(self) -> "Board":
        clone = Board.__new__(Board)
        clone._cells = list(self._cells)
        return clone

    def piece_at(self, coord: Coordinate) -> Piece:
        return self._cells[coord.index]

    def is_empty(self, coord: Coordinate) -> bool:
        return self._cells[coord.index] is Piece.EMPTY

    def count(self, piece: Piece) -> int:
        return sum(1 for coord in all_coordinates() if self._cells[coord.index] is piece)

    def coordinates_of(self, piece: Piece) -> List[Coordinate]:
        return [coord for coord in all_coordinates() if self._cells[coord.index] is piece]

    def full_snapshot(self) -> List[List[Piece]]:
        """Return a fresh 15x15 grid indexed ``[x][y]``.

        Cells outside the octagon are reported as ``Piece.EMPTY``.
        """

        return [
            [self._cells[y * BOARD_SIZE + x] for y in range(BOARD_SIZE)]
            for x in range(BOARD_SIZE)
        ]

    def _place(self, coord: Coordinate, piece: Piece) -> None:
        self._cells[coord.index] = piece

    def _remove(self, coord: Coordinate) -> Piece:
        piece = self._cells[coord.index]
        self._cells[coord.index] = Piece.EMPTY
        return piece

    def _remove_all(self, coords: Iterable[Coordinate]) -> None:
        for coord in coords:
            self._remove(coord)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return (
            f"Board(dwarfs={self.count(Piece.DWARF)}, "
            f"trolls={self.count(Piece.TROLL)})"
        )
