from typing import Any, Dict, Optional

from gravityfour import events


class GameError(Exception):
    """A rejected intent. Raised before any session state is touched."""

    kind = 'GameError'
    client_event = events.INVALID_MOVE
    default_message = 'Invalid move.'

    def __init__(self, message: Optional[str] = None, attempted_row: Any = None, attempted_col: Any = None):
        self.message = message or self.default_message
        self.attempted_row = attempted_row
        self.attempted_col = attempted_col
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, Any]:
        if self.client_event == events.SERVER_ERROR:
            return {'message': self.message}
        payload: Dict[str, Any] = {'message': self.message, 'reason': self.kind}
        if self.attempted_row is not None:
            payload['attemptedRow'] = self.attempted_row
        if self.attempted_col is not None:
            payload['attemptedCol'] = self.attempted_col
        return payload


class SessionNotFound(GameError):
    kind = 'SessionNotFound'
    client_event = events.SERVER_ERROR
    default_message = 'Game not found.'


class NotYourTurn(GameError):
    kind = 'NotYourTurn'
    default_message = 'Not your turn.'


class WrongAction(GameError):
    kind = 'WrongAction'


class OutOfBounds(GameError):
    kind = 'OutOfBounds'
    default_message = 'Invalid coordinates.'


class ColumnFull(GameError):
    kind = 'ColumnFull'
    default_message = 'Column is full.'


class InvalidTarget(GameError):
    kind = 'InvalidTarget'


class GameFinished(GameError):
    kind = 'GameFinished'
    default_message = 'Game is over.'


class GameInProgress(GameError):
    kind = 'GameInProgress'
    client_event = events.SERVER_ERROR
    default_message = 'Game is still in progress.'


class InternalInconsistency(GameError):
    """Session bookkeeping is broken (missing colour or opponent)."""

    kind = 'InternalInconsistency'
    client_event = events.SERVER_ERROR
    default_message = 'Internal server error.'
