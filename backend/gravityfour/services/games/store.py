from typing import Dict, List, Optional

from gravityfour.models import Session
from gravityfour.services.games.errors import SessionNotFound


class SessionStore:
    """In-memory registry of live sessions keyed by room id."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}

    def create(self, room_id: str, session: Session) -> Session:
        if room_id in self._sessions:
            raise ValueError(f'session {room_id} already exists')
        self._sessions[room_id] = session
        return session

    def get(self, room_id: str) -> Session:
        session = self._sessions.get(room_id) if isinstance(room_id, str) else None
        if session is None:
            raise SessionNotFound()
        return session

    def find(self, room_id: str) -> Optional[Session]:
        return self._sessions.get(room_id)

    def find_by_participant(self, participant_id: str) -> Optional[Session]:
        # Linear scan; there are never many sessions per process
        return next((s for s in self._sessions.values() if participant_id in s.player_ids), None)

    def remove(self, room_id: str) -> bool:
        return self._sessions.pop(room_id, None) is not None

    def all(self) -> List[Session]:
        return list(self._sessions.values())

    def __contains__(self, room_id) -> bool:
        return room_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
