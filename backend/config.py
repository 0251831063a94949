import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma separated list of browser origins allowed to open a socket
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000'
    ).split(',') if o.strip()]
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/ws')
    # Board geometry
    BOARD_ROWS = int(os.environ.get('BOARD_ROWS', '6'))
    BOARD_COLS = int(os.environ.get('BOARD_COLS', '7'))
    # Every Nth completed placement grants the mover a removal
    REMOVE_EVERY_N_TURNS = int(os.environ.get('REMOVE_EVERY_N_TURNS', '3'))
    HOST = os.environ.get('HOST', '127.0.0.1')
    PORT = int(os.environ.get('PORT', '3000'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
