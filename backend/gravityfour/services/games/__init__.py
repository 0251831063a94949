"""Game domain services: board rules, turn transitions, sessions, lobby.

This package contains the authoritative game logic that the Socket.IO
handlers and HTTP routes call into, keeping transport concerns separated
from core game mechanics.
"""
