from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import logging
from config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(getattr(logging, str(flask_app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/ws')
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One game service per application: lobby slot, session store, rule dispatch
    from gravityfour.services.games.service import GameService
    from gravityfour.socketio_events import make_sender, register_socketio_handlers
    flask_app.extensions['gravityfour'] = GameService.from_config(
        flask_app.config, make_sender(namespace), logger=flask_app.logger
    )
    register_socketio_handlers(namespace)

    # Import and register blueprints here
    from gravityfour.main import main
    flask_app.register_blueprint(main)

    from gravityfour.api.sessions import sessions
    flask_app.register_blueprint(sessions, url_prefix='/api/sessions')

    from gravityfour.cli import replay_moves_command
    flask_app.cli.add_command(replay_moves_command)

    return flask_app
