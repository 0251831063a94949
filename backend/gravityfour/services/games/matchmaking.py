from typing import Optional, Tuple


class Matchmaker:
    """Single-slot lobby: one participant waits until the next one arrives."""

    def __init__(self):
        self.waiting: Optional[str] = None

    def join(self, participant_id: str) -> Optional[Tuple[str, str]]:
        """Return ``(first, second)`` when a pair forms, else park the caller."""
        if self.waiting is None or self.waiting == participant_id:
            self.waiting = participant_id
            return None
        first = self.waiting
        self.waiting = None
        return first, participant_id

    def leave(self, participant_id: str) -> bool:
        if self.waiting == participant_id:
            self.waiting = None
            return True
        return False
