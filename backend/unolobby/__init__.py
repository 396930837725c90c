import logging

from flask import Flask, current_app
from flask_cors import CORS
from flask_socketio import SocketIO

from unolobby.config import Config

socketio = SocketIO(async_mode=None)


def _allowed_origins(raw):
    origins = [o.strip() for o in (raw or '*').split(',') if o.strip()]
    if not origins or origins == ['*']:
        return '*'
    return origins


def get_registry():
    """The SessionRegistry bound to the current app."""
    return current_app.extensions['unolobby']


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(getattr(logging, str(flask_app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    allowed_origins = _allowed_origins(flask_app.config.get('CORS_ORIGINS'))
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from unolobby.channel import SocketIOChannel
    from unolobby.services.games import SessionRegistry

    timer_enabled = flask_app.config.get('TURN_TIMER_ENABLED', True)
    flask_app.extensions['unolobby'] = SessionRegistry(
        SocketIOChannel(socketio),
        capacity=flask_app.config.get('LOBBY_CAPACITY', 4),
        hand_size=flask_app.config.get('HAND_SIZE', 7),
        turn_time=flask_app.config.get('TURN_TIME_SEC', 30),
        tick_interval=flask_app.config.get('TICK_INTERVAL_SEC', 1),
        spawn=socketio.start_background_task if timer_enabled else None,
        sleep=socketio.sleep,
        logger=flask_app.logger,
    )

    from unolobby.main import main
    flask_app.register_blueprint(main)

    # Importing here ensures the handlers bind to the initialized socketio instance
    from unolobby.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    flask_app.logger.info(
        f"[app-init] capacity={flask_app.config.get('LOBBY_CAPACITY')} turn_time={flask_app.config.get('TURN_TIME_SEC')}s timer={timer_enabled}"
    )
    return flask_app
