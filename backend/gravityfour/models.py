from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set
import string
import random

from gravityfour.services.games.board import Board, empty_board


class PlayerColor:
    RED = 'red'        # first participant
    YELLOW = 'yellow'  # second participant


class Action:
    PLACE = 'PLACE'
    REMOVE = 'REMOVE'


@dataclass
class PlayerSlot:
    color: str
    number: int
    starts_next: bool = False

    def to_dict(self):
        return {
            'color': self.color,
            'number': self.number,
            'startsNext': self.starts_next,
        }


@dataclass
class Session:
    room_id: str
    player_ids: List[str]
    board: Board
    players: Dict[str, PlayerSlot] = field(default_factory=dict)
    current_player_id: Optional[str] = None
    turn: int = 1
    action: str = Action.PLACE
    winner: Optional[str] = None
    draw: bool = False
    winning_line: Optional[List[Dict[str, int]]] = None
    rematch_requested_by: Set[str] = field(default_factory=set)

    @classmethod
    def start(cls, room_id: str, first_id: str, second_id: str, rows: int, cols: int) -> 'Session':
        """Build a fresh match; the longer-waiting participant plays red and moves first."""
        return cls(
            room_id=room_id,
            player_ids=[first_id, second_id],
            board=empty_board(rows, cols),
            players={
                first_id: PlayerSlot(color=PlayerColor.RED, number=1, starts_next=False),
                second_id: PlayerSlot(color=PlayerColor.YELLOW, number=2, starts_next=True),
            },
            current_player_id=first_id,
        )

    @property
    def is_terminal(self) -> bool:
        return self.winner is not None or self.draw

    @property
    def rows(self) -> int:
        return len(self.board)

    @property
    def cols(self) -> int:
        return len(self.board[0])

    def color_of(self, participant_id: str) -> Optional[str]:
        slot = self.players.get(participant_id)
        return slot.color if slot else None

    def opponent_of(self, participant_id: str) -> Optional[str]:
        return next((pid for pid in self.player_ids if pid != participant_id), None)

    def player_by_number(self, number: int) -> Optional[str]:
        return next((pid for pid in self.player_ids if self.players.get(pid) and self.players[pid].number == number), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'roomId': self.room_id,
            'board': [row[:] for row in self.board],
            'players': {pid: slot.to_dict() for pid, slot in self.players.items()},
            'playerIds': list(self.player_ids),
            'currentPlayerId': self.current_player_id,
            'turn': self.turn,
            'action': self.action,
            'winner': self.winner,
            'draw': self.draw,
            'rematchRequestedBy': sorted(self.rematch_requested_by),
        }

    def summary(self) -> Dict[str, Any]:
        return {
            'roomId': self.room_id,
            'playerIds': list(self.player_ids),
            'turn': self.turn,
            'action': self.action,
            'status': 'finished' if self.is_terminal else 'in_progress',
        }


def generate_room_id(is_taken: Callable[[str], bool], length=6):
    """Generate a unique, short room code."""
    while True:
        code = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))
        if not is_taken(code):
            return code
