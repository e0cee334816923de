"""Integer-code boundary for hosts that cannot consume Python exceptions.

Each function takes ordinary engine objects (``None`` stands in for a missing
handle) and reports outcomes as small integers, catching engine errors here
and nowhere else.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Type

from .errors import GameOver, IllegalMove, InvalidDirection, OutOfBounds, ThudError, WrongTurn
from .game.board import Piece, Player
from .game.rules import Game, Status
from .geometry import Coordinate, Direction


OK = 0
MISSING_ARGUMENT = -1
ILLEGAL_MOVE = -2
INVALID_DIRECTION = -3
WRONG_TURN = -4
GAME_OVER = -5
OUT_OF_BOUNDS = -6

TURN_DWARF = 0
TURN_TROLL = 1
TURN_ENDED = 2

WINNER_DWARF = 0
WINNER_TROLL = 1
WINNER_DRAW = 2
WINNER_NONE = 3

_ERROR_CODES: Dict[Type[ThudError], int] = {
    IllegalMove: ILLEGAL_MOVE,
    InvalidDirection: INVALID_DIRECTION,
    WrongTurn: WRONG_TURN,
    GameOver: GAME_OVER,
    OutOfBounds: OUT_OF_BOUNDS,
    ThudError: ILLEGAL_MOVE,
}


def piece_to_int(piece: Piece) -> int:
    return piece.code


def _error_code(exc: ThudError) -> int:
    # Most specific entry wins; ThudError itself closes the lookup
    return next(_ERROR_CODES[klass] for klass in type(exc).__mro__ if klass in _ERROR_CODES)


def thud_new() -> Game:
    return Game()


def coord_new(x: int, y: int) -> Optional[Coordinate]:
    """Return the coordinate, or ``None`` if it lies outside the octagon."""

    try:
        return Coordinate.zero_based(x, y)
    except OutOfBounds:
        return None


def thud_move(game: Optional[Game], src: Optional[Coordinate], dest: Optional[Coordinate]) -> int:
    if game is None or src is None or dest is None:
        return MISSING_ARGUMENT
    try:
        game.move_piece(src, dest)
    except ThudError as exc:
        return _error_code(exc)
    return OK


def thud_attack(game: Optional[Game], src: Optional[Coordinate], dest: Optional[Coordinate]) -> int:
    if game is None or src is None or dest is None:
        return MISSING_ARGUMENT
    try:
        game.attack(src, dest)
    except ThudError as exc:
        return _error_code(exc)
    return OK


def thud_troll_cap(
    game: Optional[Game],
    src: Optional[Coordinate],
    targets: Optional[Sequence[int]],
) -> int:
    """Stationary multi-capture from an 8-slot mask.

    Slot ``i`` set to ``1`` selects ``Direction(i)``; ``0`` leaves it out. A
    mask of the wrong length or with any other slot value is a format error.
    """

    if game is None or src is None or targets is None:
        return MISSING_ARGUMENT
    if len(targets) != len(Direction):
        return INVALID_DIRECTION

    directions: List[Direction] = []
    for slot, flag in enumerate(targets):
        if isinstance(flag, bool) or flag not in (0, 1):
            return INVALID_DIRECTION
        if flag == 1:
            directions.append(Direction(slot))

    try:
        game.troll_cap(src, directions)
    except ThudError as exc:
        return _error_code(exc)
    return OK


def thud_get_turn(game: Optional[Game]) -> int:
    if game is None:
        return MISSING_ARGUMENT
    turn = game.turn()
    if turn is Player.DWARF:
        return TURN_DWARF
    if turn is Player.TROLL:
        return TURN_TROLL
    return TURN_ENDED


def thud_get_winner(game: Optional[Game]) -> int:
    if game is None:
        return MISSING_ARGUMENT
    outcome = game.winner()
    if outcome is None:
        return WINNER_NONE
    if outcome.status is Status.DRAW:
        return WINNER_DRAW
    return WINNER_DWARF if outcome.player is Player.DWARF else WINNER_TROLL


def thud_get_score(game: Optional[Game]) -> Optional[List[int]]:
    if game is None:
        return None
    dwarf, troll = game.score()
    return [dwarf, troll]


def thud_get_board(game: Optional[Game]) -> Optional[List[List[int]]]:
    """15x15 grid indexed ``[x][y]`` of piece codes."""

    if game is None:
        return None
    return [[piece_to_int(piece) for piece in column] for column in game.board().full_snapshot()]
