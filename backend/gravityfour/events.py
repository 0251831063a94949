"""Socket.IO event names shared with the browser client."""

# Client -> server
PLACE_PIECE = 'placePiece'
REMOVE_PIECE = 'removePiece'
REQUEST_REMATCH = 'requestRematch'

# Server -> client
WAITING = 'waiting'
ASSIGN_PLAYER = 'assignPlayer'
GAME_STATE_UPDATE = 'gameStateUpdate'
GAME_OVER = 'gameOver'
OPPONENT_DISCONNECT = 'opponentDisconnect'
INVALID_MOVE = 'invalidMove'
SERVER_ERROR = 'error'
REMATCH_PENDING = 'rematchPending'
OPPONENT_WANTS_REMATCH = 'opponentWantsRematch'
REMATCH_CANCELLED = 'rematchCancelled'
