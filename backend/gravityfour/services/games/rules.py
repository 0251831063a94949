"""Turn and action transitions for a single session.

Each intent is validated completely before the board or turn state is
written, so a rejected intent leaves the session exactly as it was.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from gravityfour.models import Action, Session
from gravityfour.services.games.board import (
    check_win,
    collapse_column_after_removal,
    empty_board,
    in_bounds,
    is_full,
    lowest_empty_row,
)
from gravityfour.services.games.errors import (
    ColumnFull,
    GameFinished,
    GameInProgress,
    InternalInconsistency,
    InvalidTarget,
    NotYourTurn,
    OutOfBounds,
    SessionNotFound,
    WrongAction,
)

DEFAULT_REMOVE_EVERY = 3


@dataclass
class MoveOutcome:
    row: int
    col: int
    winning_line: Optional[List[Dict[str, int]]] = None
    draw: bool = False

    @property
    def terminal(self) -> bool:
        return self.winning_line is not None or self.draw


@dataclass
class RematchOutcome:
    started: bool
    opponent_id: Optional[str] = None


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_turn(session: Session, actor_id: str, required: str) -> None:
    if session.is_terminal:
        raise GameFinished()
    if session.current_player_id != actor_id:
        raise NotYourTurn()
    if session.action != required:
        raise WrongAction(f'Cannot {required.lower()} during {session.action}.')


def _actor_color_and_opponent(session: Session, actor_id: str):
    color = session.color_of(actor_id)
    if not color:
        raise InternalInconsistency('Player color not found.')
    opponent_id = session.opponent_of(actor_id)
    if not opponent_id or opponent_id not in session.players:
        raise InternalInconsistency('Opponent not found.')
    return color, opponent_id


def place_piece(session: Session, actor_id: str, col, remove_every: int = DEFAULT_REMOVE_EVERY) -> MoveOutcome:
    """Drop the actor's piece into ``col`` and advance the turn.

    Every ``remove_every``-th completed placement keeps the turn with the
    mover and switches the action to REMOVE.
    """
    _check_turn(session, actor_id, Action.PLACE)
    if not _is_int(col) or not 0 <= col < session.cols:
        raise OutOfBounds('Invalid column.', attempted_col=col)
    color, opponent_id = _actor_color_and_opponent(session, actor_id)
    row = lowest_empty_row(session.board, col)
    if row is None:
        raise ColumnFull(attempted_col=col)

    session.board[row][col] = color

    winning_line = check_win(session.board, color)
    if winning_line:
        session.winner = actor_id
        session.winning_line = winning_line
        return MoveOutcome(row=row, col=col, winning_line=winning_line)
    if is_full(session.board):
        session.draw = True
        return MoveOutcome(row=row, col=col, draw=True)

    session.turn += 1
    if (session.turn - 1) % remove_every == 0:
        session.action = Action.REMOVE
    else:
        session.current_player_id = opponent_id
        session.action = Action.PLACE
    return MoveOutcome(row=row, col=col)


def remove_piece(session: Session, actor_id: str, row, col) -> MoveOutcome:
    """Take one opponent piece off the board and hand the turn over.

    The turn counter is untouched and no win check follows; the column
    simply settles.
    """
    _check_turn(session, actor_id, Action.REMOVE)
    if not (_is_int(row) and _is_int(col)) or not in_bounds(session.board, row, col):
        raise OutOfBounds(attempted_row=row, attempted_col=col)
    color, opponent_id = _actor_color_and_opponent(session, actor_id)
    target = session.board[row][col]
    if target is None:
        raise InvalidTarget('Cannot remove empty spot.', attempted_row=row, attempted_col=col)
    if target == color:
        raise InvalidTarget('Cannot remove your own piece.', attempted_row=row, attempted_col=col)

    session.board[row][col] = None
    collapse_column_after_removal(session.board, col, row)
    session.current_player_id = opponent_id
    session.action = Action.PLACE
    return MoveOutcome(row=row, col=col)


def request_rematch(session: Session, actor_id: str) -> RematchOutcome:
    if actor_id not in session.players:
        raise SessionNotFound()
    if not session.is_terminal:
        raise GameInProgress()
    opponent_id = session.opponent_of(actor_id)
    if not opponent_id:
        raise InternalInconsistency('Opponent not found.')
    session.rematch_requested_by.add(actor_id)
    if all(pid in session.rematch_requested_by for pid in session.player_ids):
        reset_for_rematch(session)
        return RematchOutcome(started=True, opponent_id=opponent_id)
    return RematchOutcome(started=False, opponent_id=opponent_id)


def reset_for_rematch(session: Session) -> None:
    """Start a new game in place, keeping room id, colours and numbers.

    The participant flagged ``starts_next`` opens and both flags flip.
    """
    first_id = session.player_by_number(1)
    second_id = session.player_by_number(2)
    if not first_id or not second_id:
        raise InternalInconsistency('Player state missing.')
    first, second = session.players[first_id], session.players[second_id]

    session.board = empty_board(session.rows, session.cols)
    session.winner = None
    session.draw = False
    session.winning_line = None
    session.turn = 1
    session.action = Action.PLACE
    session.rematch_requested_by.clear()

    if first.starts_next:
        session.current_player_id = first_id
    else:
        session.current_player_id = second_id
    first.starts_next, second.starts_next = not first.starts_next, not second.starts_next
