"""Outbound delivery: address one connected player or everyone."""

from typing import Any


class Channel:
    def send(self, player_id: str, event: str, payload: Any) -> None:
        raise NotImplementedError

    def broadcast(self, event: str, payload: Any) -> None:
        raise NotImplementedError


class SocketIOChannel(Channel):
    """Deliver through Flask-SocketIO. Safe to call from background tasks."""

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def send(self, player_id, event, payload):
        self.socketio.emit(event, payload, to=player_id, namespace=self.namespace)

    def broadcast(self, event, payload):
        self.socketio.emit(event, payload, namespace=self.namespace)
