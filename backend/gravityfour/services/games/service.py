import functools
import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from gravityfour import events
from gravityfour.models import Session, generate_room_id
from gravityfour.services.games import rules
from gravityfour.services.games.board import DEFAULT_COLS, DEFAULT_ROWS
from gravityfour.services.games.errors import GameError, InternalInconsistency
from gravityfour.services.games.matchmaking import Matchmaker
from gravityfour.services.games.store import SessionStore

Send = Callable[[str, Any, str], None]


def serialized(method):
    """Run the wrapped operation to completion under the service lock.

    Outbound messages are sent before the lock is released, so no other
    connect, intent or disconnect can interleave with a mutation and its
    broadcast.
    """
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class GameService:
    """Lobby, session registry and rule dispatch for one server process."""

    def __init__(self, send: Send, logger: Optional[logging.Logger] = None,
                 rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS,
                 remove_every: int = rules.DEFAULT_REMOVE_EVERY):
        if remove_every < 2:
            # 0 breaks the modulo; 1 hands out a removal before the opponent has a piece
            raise ValueError(f'remove_every must be at least 2, got {remove_every}')
        self.store = SessionStore()
        self.matchmaker = Matchmaker()
        self.rows = rows
        self.cols = cols
        self.remove_every = remove_every
        self._send = send
        self._logger = logger or logging.getLogger(__name__)
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config, send: Send, logger=None) -> 'GameService':
        return cls(
            send,
            logger=logger,
            rows=int(config.get('BOARD_ROWS', DEFAULT_ROWS)),
            cols=int(config.get('BOARD_COLS', DEFAULT_COLS)),
            remove_every=int(config.get('REMOVE_EVERY_N_TURNS', rules.DEFAULT_REMOVE_EVERY)),
        )

    # ---- Delivery helpers ----

    def _broadcast(self, session: Session, event: str, payload: Any) -> None:
        for pid in session.player_ids:
            self._send(event, payload, pid)

    def _reject(self, actor_id: str, err: GameError, room_id=None) -> None:
        if isinstance(err, InternalInconsistency):
            self._logger.error(f"[inconsistency] room={room_id} actor={actor_id} kind={err.kind} message={err.message}")
        else:
            self._logger.info(f"[rejected] room={room_id} actor={actor_id} kind={err.kind} message={err.message}")
        self._send(err.client_event, err.to_payload(), actor_id)

    def _finish(self, session: Session) -> None:
        self._logger.info(
            f"[game-over] room={session.room_id} winner={session.winner} draw={session.draw} turn={session.turn}"
        )
        self._broadcast(session, events.GAME_OVER, {
            'winnerId': session.winner,
            'draw': session.draw,
            'board': [row[:] for row in session.board],
            'winningLine': session.winning_line,
        })

    # ---- Lobby ----

    @serialized
    def connect(self, participant_id: str) -> Optional[Session]:
        """Queue a newly connected participant; returns the session if a pair formed."""
        stale = self.store.find_by_participant(participant_id)
        if stale is not None:
            self._logger.warning(f"[lobby] participant={participant_id} still held room={stale.room_id}; dropping it")
            stale_opponent = stale.opponent_of(participant_id)
            if stale_opponent:
                self._send(events.OPPONENT_DISCONNECT, {}, stale_opponent)
            self.store.remove(stale.room_id)

        pair = self.matchmaker.join(participant_id)
        if pair is None:
            self._logger.info(f"[lobby] participant={participant_id} waiting for an opponent")
            self._send(events.WAITING, {}, participant_id)
            return None

        first_id, second_id = pair
        room_id = generate_room_id(lambda code: code in self.store)
        session = self.store.create(room_id, Session.start(room_id, first_id, second_id, self.rows, self.cols))
        self._logger.info(f"[pair] room={room_id} red={first_id} yellow={second_id}")
        snapshot = session.to_dict()
        for pid in session.player_ids:
            self._send(events.ASSIGN_PLAYER, {'playerNumber': session.players[pid].number, 'state': snapshot}, pid)
        return session

    @serialized
    def disconnect(self, participant_id: str) -> None:
        if self.matchmaker.leave(participant_id):
            self._logger.info(f"[lobby] waiting participant={participant_id} left")
            return

        session = self.store.find_by_participant(participant_id)
        if session is None:
            self._logger.info(f"[disconnect] participant={participant_id} was not in a game")
            return

        session.rematch_requested_by.discard(participant_id)
        opponent_id = session.opponent_of(participant_id)
        self.store.remove(session.room_id)
        self._logger.info(f"[disconnect] participant={participant_id} room={session.room_id} removed")
        if opponent_id:
            self._send(events.OPPONENT_DISCONNECT, {}, opponent_id)
            if opponent_id in session.rematch_requested_by:
                self._send(events.REMATCH_CANCELLED, {}, opponent_id)

    # ---- Intents ----

    @serialized
    def place_piece(self, participant_id: str, room_id, col) -> Optional[Session]:
        try:
            session = self.store.get(room_id)
            outcome = rules.place_piece(session, participant_id, col, remove_every=self.remove_every)
        except GameError as err:
            self._reject(participant_id, err, room_id)
            return None

        self._logger.info(
            f"[place] room={room_id} participant={participant_id} row={outcome.row} col={outcome.col} "
            f"turn={session.turn} next={session.current_player_id} action={session.action}"
        )
        if outcome.terminal:
            self._finish(session)
        else:
            self._broadcast(session, events.GAME_STATE_UPDATE, session.to_dict())
        return session

    @serialized
    def remove_piece(self, participant_id: str, room_id, row, col) -> Optional[Session]:
        try:
            session = self.store.get(room_id)
            outcome = rules.remove_piece(session, participant_id, row, col)
        except GameError as err:
            self._reject(participant_id, err, room_id)
            return None

        self._logger.info(
            f"[remove] room={room_id} participant={participant_id} row={outcome.row} col={outcome.col} "
            f"next={session.current_player_id}"
        )
        self._broadcast(session, events.GAME_STATE_UPDATE, session.to_dict())
        return session

    @serialized
    def request_rematch(self, participant_id: str, room_id) -> Optional[Session]:
        try:
            session = self.store.get(room_id)
            outcome = rules.request_rematch(session, participant_id)
        except GameError as err:
            self._reject(participant_id, err, room_id)
            return None

        if outcome.started:
            self._logger.info(f"[rematch] room={room_id} starts with {session.current_player_id}")
            self._broadcast(session, events.GAME_STATE_UPDATE, session.to_dict())
        else:
            self._logger.info(f"[rematch] room={room_id} participant={participant_id} waiting for {outcome.opponent_id}")
            self._send(events.REMATCH_PENDING, {}, participant_id)
            self._send(events.OPPONENT_WANTS_REMATCH, {}, outcome.opponent_id)
        return session

    # ---- Read-only views ----

    @serialized
    def snapshot(self, room_id: str) -> Optional[Dict[str, Any]]:
        session = self.store.find(room_id)
        return session.to_dict() if session else None

    @serialized
    def sessions(self) -> List[Dict[str, Any]]:
        return [s.summary() for s in self.store.all()]

    @serialized
    def is_waiting(self) -> bool:
        return self.matchmaker.waiting is not None

