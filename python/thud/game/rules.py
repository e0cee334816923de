"""Turn enforcement, scoring and end detection built on :mod:`thud.game.moves`."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar, Iterable, List, Optional, Tuple

from ..errors import GameOver, InvalidDirection, ThudError, WrongTurn
from ..geometry import Coordinate
from . import moves
from .board import Board, Player, opponent
from .moves import Action, ActionKind


LOG = logging.getLogger("thud.game")


class Status(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


@dataclass(frozen=True)
class EndState:
    status: Status
    player: Optional[Player] = None

    IN_PROGRESS: ClassVar["EndState"]
    DRAW: ClassVar["EndState"]

    @classmethod
    def won(cls, player: Player) -> "EndState":
        return cls(Status.WON, player)

    @property
    def is_over(self) -> bool:
        return self.status is not Status.IN_PROGRESS


EndState.IN_PROGRESS = EndState(Status.IN_PROGRESS)
EndState.DRAW = EndState(Status.DRAW)


@dataclass(frozen=True)
class MoveResult:
    action: Action
    captured: Tuple[Coordinate, ...]
    end_state: EndState

    @property
    def player(self) -> Player:
        return self.action.player


class Game:
    """A single game of Thud.

    The game exclusively owns its board. Every mutating call validates fully
    before changing anything, so a rejected call leaves board, score, turn and
    history exactly as they were.
    """

    def __init__(self, board: Optional[Board] = None, turn: Player = Player.DWARF) -> None:
        self._board = Board.standard() if board is None else board.copy()
        self._turn: Optional[Player] = turn
        self._end_state = EndState.IN_PROGRESS
        self._dwarf_captures = 0
        self._troll_captures = 0
        self._history: List[MoveResult] = []
        if board is not None:
            self._evaluate_end(turn)

    @classmethod
    def from_board(cls, board: Board, turn: Player = Player.DWARF) -> "Game":
        """Start from a custom position; an already decided position starts ended."""

        return cls(board, turn)

    # Queries

    def turn(self) -> Optional[Player]:
        return self._turn

    def winner(self) -> Optional[EndState]:
        if not self._end_state.is_over:
            return None
        return self._end_state

    @property
    def end_state(self) -> EndState:
        return self._end_state

    @property
    def is_over(self) -> bool:
        return self._end_state.is_over

    def score(self) -> Tuple[int, int]:
        return self._dwarf_captures, self._troll_captures

    def board(self) -> Board:
        return self._board.copy()

    @property
    def history(self) -> Tuple[MoveResult, ...]:
        return tuple(self._history)

    def remaining(self, player: Player) -> int:
        return self._board.count(player.piece)

    def legal_actions(self) -> List[Action]:
        if self._turn is None:
            return []
        return list(moves.legal_actions(self._board, self._turn))

    # Actions

    def move_piece(
        self,
        src: Coordinate,
        dest: Coordinate,
        player: Optional[Player] = None,
    ) -> MoveResult:
        """Slide a Dwarf any distance along an unobstructed straight line."""

        action = Action(ActionKind.SLIDE, src, dest)
        captured = self._attempt(action, player, lambda: moves.apply_slide(self._board, src, dest))
        return self._commit(action, captured)

    def attack(
        self,
        src: Coordinate,
        dest: Coordinate,
        player: Optional[Player] = None,
    ) -> MoveResult:
        """Step a Troll one cell and smash every Dwarf around its new cell."""

        action = Action(ActionKind.STEP, src, dest)
        captured = self._attempt(action, player, lambda: moves.apply_step(self._board, src, dest))
        return self._commit(action, captured)

    def troll_cap(
        self,
        src: Coordinate,
        directions: Iterable[object],
        player: Optional[Player] = None,
    ) -> MoveResult:
        """Capture the Trolls next to a stationary Dwarf in the given directions.

        Directions may be :class:`~thud.geometry.Direction` members or their
        ordinals. The batch is all-or-nothing.
        """

        try:
            parsed = moves.parse_directions(directions)
        except InvalidDirection as exc:
            LOG.debug("Rejected %s from %s: %s", ActionKind.CAPTURE.value, src, exc)
            raise
        action = Action(ActionKind.CAPTURE, src, directions=parsed)
        captured = self._attempt(
            action, player, lambda: moves.apply_troll_cap(self._board, src, parsed)
        )
        return self._commit(action, captured)

    # Internals

    def _attempt(
        self,
        action: Action,
        player: Optional[Player],
        apply: Callable[[], List[Coordinate]],
    ) -> List[Coordinate]:
        try:
            self._require_turn(action.player, player)
            return apply()
        except ThudError as exc:
            LOG.debug("Rejected %s from %s: %s", action.kind.value, action.origin, exc)
            raise

    def _require_turn(self, actor: Player, player: Optional[Player]) -> None:
        if self._turn is None:
            raise GameOver(f"Game already ended: {self._end_state}")
        if player is not None and player is not self._turn:
            raise WrongTurn(f"It is the {self._turn.value} turn, not {player.value}")
        if actor is not self._turn:
            raise WrongTurn(f"It is the {self._turn.value} turn, not {actor.value}")

    def _commit(self, action: Action, captured: List[Coordinate]) -> MoveResult:
        actor = action.player
        if actor is Player.DWARF:
            self._dwarf_captures += len(captured)
        else:
            self._troll_captures += len(captured)

        self._evaluate_end(opponent(actor))
        result = MoveResult(action=action, captured=tuple(captured), end_state=self._end_state)
        self._history.append(result)

        LOG.debug(
            "%s %s from %s to %s captured %d",
            actor.value,
            action.kind.value,
            action.origin,
            action.target,
            len(captured),
        )
        return result

    def _evaluate_end(self, to_move: Player) -> None:
        board = self._board
        wiped_out = [player for player in Player if board.count(player.piece) == 0]
        if len(wiped_out) == 2:
            self._finish(EndState.DRAW)
        elif wiped_out:
            self._finish(EndState.won(opponent(wiped_out[0])))
        elif not moves.has_legal_action(board, to_move):
            if moves.has_legal_action(board, opponent(to_move)):
                self._finish(EndState.won(opponent(to_move)))
            else:
                self._finish(EndState.DRAW)
        else:
            self._turn = to_move

    def _finish(self, end_state: EndState) -> None:
        self._end_state = end_state
        self._turn = None
        LOG.info(
            "Game over: %s (score dwarf=%d troll=%d)",
            end_state.player.value if end_state.player else end_state.status.value,
            self._dwarf_captures,
            self._troll_captures,
        )
