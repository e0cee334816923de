"""Move and capture rules.

Every ``check_*`` function is a pure validator: it inspects the board, raises
:class:`~thud.errors.IllegalMove` on any violation and otherwise returns what
the action would capture. The ``apply_*`` functions validate first and only
then touch the board, so a rejected action never leaves a partial mutation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

from ..errors import IllegalMove
from ..geometry import Coordinate, Direction
from .board import Board, Piece, Player


class ActionKind(Enum):
    SLIDE = "slide"
    STEP = "step"
    CAPTURE = "capture"


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    origin: Coordinate
    target: Optional[Coordinate] = None
    directions: Tuple[Direction, ...] = ()

    @property
    def player(self) -> Player:
        return Player.TROLL if self.kind is ActionKind.STEP else Player.DWARF


def parse_directions(directions: Iterable[object]) -> Tuple[Direction, ...]:
    """Turn direction tokens into a sorted tuple with duplicates collapsed.

    Raises :class:`~thud.errors.InvalidDirection` for a malformed token.
    """

    return tuple(sorted({Direction.from_num(token) for token in directions}))


def adjacent(board: Board, coord: Coordinate, piece: Piece) -> List[Coordinate]:
    """Neighbours of ``coord`` holding ``piece``, in clockwise order."""

    return [nb for _, nb in coord.neighbours() if board.piece_at(nb) is piece]


def check_slide(board: Board, src: Coordinate, dest: Coordinate) -> None:
    if board.piece_at(src) is not Piece.DWARF:
        raise IllegalMove(f"No Dwarf at {src}")

    line = src.line_to(dest)
    if line is None:
        raise IllegalMove(f"{src} -> {dest} is not a straight line")
    direction, distance = line

    cell = src
    for _ in range(distance - 1):
        cell = cell.step(direction)
        if cell is None or not board.is_empty(cell):
            raise IllegalMove(f"Path from {src} to {dest} is blocked")

    if not board.is_empty(dest):
        raise IllegalMove(f"Destination {dest} is occupied")


def check_step(board: Board, src: Coordinate, dest: Coordinate) -> List[Coordinate]:
    if board.piece_at(src) is not Piece.TROLL:
        raise IllegalMove(f"No Troll at {src}")

    line = src.line_to(dest)
    if line is None or line[1] != 1:
        raise IllegalMove(f"{dest} is not adjacent to {src}")

    if not board.is_empty(dest):
        raise IllegalMove(f"Destination {dest} is occupied")

    return adjacent(board, dest, Piece.DWARF)


def check_troll_cap(
    board: Board,
    src: Coordinate,
    directions: Tuple[Direction, ...],
) -> List[Coordinate]:
    if board.piece_at(src) is not Piece.DWARF:
        raise IllegalMove(f"No Dwarf at {src}")
    if not directions:
        raise IllegalMove("At least one capture direction is required")

    targets: List[Coordinate] = []
    for direction in directions:
        target = src.step(direction)
        if target is None or board.piece_at(target) is not Piece.TROLL:
            raise IllegalMove(f"No Troll {direction.name} of {src}")
        targets.append(target)
    return targets


def apply_slide(board: Board, src: Coordinate, dest: Coordinate) -> List[Coordinate]:
    check_slide(board, src, dest)
    board._place(dest, board._remove(src))
    return []


def apply_step(board: Board, src: Coordinate, dest: Coordinate) -> List[Coordinate]:
    smashed = check_step(board, src, dest)
    board._place(dest, board._remove(src))
    board._remove_all(smashed)
    return smashed


def apply_troll_cap(
    board: Board,
    src: Coordinate,
    directions: Tuple[Direction, ...],
) -> List[Coordinate]:
    captured = check_troll_cap(board, src, directions)
    board._remove_all(captured)
    return captured


def slide_moves(board: Board, src: Coordinate) -> Iterator[Coordinate]:
    """Every empty cell the Dwarf at ``src`` could slide to."""

    if board.piece_at(src) is not Piece.DWARF:
        return
    for direction in Direction:
        cell = src.step(direction)
        while cell is not None and board.is_empty(cell):
            yield cell
            cell = cell.step(direction)


def step_moves(board: Board, src: Coordinate) -> Iterator[Coordinate]:
    if board.piece_at(src) is not Piece.TROLL:
        return
    for _, nb in src.neighbours():
        if board.is_empty(nb):
            yield nb


def capture_directions(board: Board, src: Coordinate) -> List[Direction]:
    if board.piece_at(src) is not Piece.DWARF:
        return []
    return [direction for direction, nb in src.neighbours() if board.piece_at(nb) is Piece.TROLL]


def legal_actions(board: Board, player: Player) -> Iterator[Action]:
    """Enumerate the actions available to ``player``.

    A Dwarf with adjacent Trolls contributes a single capture action naming
    every adjacent Troll; any non-empty subset of those directions is legal
    too.
    """

    for origin in board.coordinates_of(player.piece):
        if player is Player.DWARF:
            directions = capture_directions(board, origin)
            if directions:
                yield Action(ActionKind.CAPTURE, origin, directions=tuple(directions))
            for target in slide_moves(board, origin):
                yield Action(ActionKind.SLIDE, origin, target)
        else:
            for target in step_moves(board, origin):
                yield Action(ActionKind.STEP, origin, target)


def has_legal_action(board: Board, player: Player) -> bool:
    return next(legal_actions(board, player), None) is not None
