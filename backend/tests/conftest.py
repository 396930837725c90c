import os
import sys
import random
import pytest

# Ensure the backend root (containing the `unolobby` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from unolobby import create_app, socketio
from unolobby.channel import Channel
from unolobby.services.games.leaderboard import Leaderboard
from unolobby.services.games.session import Lobby


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    HOST = '127.0.0.1'
    PORT = 3000
    LOG_LEVEL = 'DEBUG'
    CORS_ORIGINS = '*'
    LOBBY_CAPACITY = 4
    HAND_SIZE = 7
    TURN_TIME_SEC = 30
    TICK_INTERVAL_SEC = 1
    # Tests drive countdown ticks by hand
    TURN_TIMER_ENABLED = False


class RecordingChannel(Channel):
    def __init__(self):
        self.sent = []

    def send(self, player_id, event, payload):
        self.sent.append((player_id, event, payload))

    def broadcast(self, event, payload):
        self.sent.append((None, event, payload))

    def events(self, event, player_id=None):
        return [
            payload for to, name, payload in self.sent
            if name == event and (player_id is None or to == player_id)
        ]

    def clear(self):
        self.sent.clear()


NAMES = ('A', 'B', 'C', 'D')


def rig(lobby, top, hands=None):
    """Replace the top card and, optionally, the hands of seated players."""
    lobby.deck.discard_pile = [top]
    for player, cards in zip(lobby.players, hands or ()):
        if cards is not None:
            player.hand = list(cards)


@pytest.fixture()
def rig_lobby():
    return rig


@pytest.fixture()
def channel():
    return RecordingChannel()


@pytest.fixture()
def leaderboard():
    return Leaderboard()


@pytest.fixture()
def make_lobby(channel, leaderboard):
    def _make(seed=7, seats=4, **kwargs):
        lobby = Lobby('L1', channel, leaderboard, rng=random.Random(seed), **kwargs)
        for name in NAMES[:seats]:
            lobby.seat(f'sid-{name}', name)
        channel.clear()
        return lobby
    return _make


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_clients(flask_app):
    clients = []

    def _connect(count=1):
        new = [socketio.test_client(flask_app, flask_test_client=flask_app.test_client()) for _ in range(count)]
        clients.extend(new)
        return new

    yield _connect
    for c in clients:
        try:
            if c.is_connected():
                c.disconnect()
        except Exception:
            pass
