import os
import sys
import pytest

# Ensure the backend root (containing the `gravityfour` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from gravityfour import create_app, socketio
from gravityfour.services.games.service import GameService


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost:3000']
    SOCKETIO_NAMESPACE = '/ws'
    BOARD_ROWS = 6
    BOARD_COLS = 7
    REMOVE_EVERY_N_TURNS = 3
    LOG_LEVEL = 'INFO'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect_client(flask_app):
    """Factory for Socket.IO test clients; all are disconnected on teardown."""
    created = []

    def _connect():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace='/ws'
        )
        created.append(test_client)
        return test_client

    yield _connect
    for test_client in created:
        try:
            if test_client.is_connected('/ws'):
                test_client.disconnect(namespace='/ws')
        except Exception:
            pass


@pytest.fixture()
def sio_client(connect_client):
    return connect_client()


class Outbox:
    """Collects outbound messages in place of the Socket.IO transport."""

    def __init__(self):
        self.sent = []

    def __call__(self, event, payload, to):
        self.sent.append((event, payload, to))

    def for_(self, participant_id):
        return [(event, payload) for event, payload, to in self.sent if to == participant_id]

    def names(self, participant_id):
        return [event for event, _ in self.for_(participant_id)]

    def clear(self):
        self.sent.clear()


@pytest.fixture()
def outbox():
    return Outbox()


@pytest.fixture()
def service(outbox):
    return GameService(outbox)
