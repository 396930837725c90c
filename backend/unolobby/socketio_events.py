from flask import current_app, request

from unolobby import get_registry, socketio


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _lobby_for_caller():
    return get_registry().find_lobby_for(_get_sid())


def handle_connect(auth=None):
    current_app.logger.debug(f"[connect] sid={_get_sid()}")


def handle_disconnect(*args):
    lobby = _lobby_for_caller()
    if lobby is None:
        return
    lobby.disconnect(_get_sid())


def handle_join_game(data=None):
    nickname = data.get('nickname') if isinstance(data, dict) else None
    if not isinstance(nickname, str) or not nickname.strip():
        nickname = 'Anonymous'
    nickname = nickname.strip()
    player = get_registry().join_game(_get_sid(), nickname)
    if player is None:
        current_app.logger.debug(f"[join-ignored] sid={_get_sid()} already seated")


def handle_play_card(card=None):
    lobby = _lobby_for_caller()
    if lobby is None or not lobby.play_card(_get_sid(), card):
        current_app.logger.debug(f"[play-ignored] sid={_get_sid()} card={card!r}")


def handle_choose_color(color=None):
    lobby = _lobby_for_caller()
    if lobby is None or not lobby.choose_color(_get_sid(), color):
        current_app.logger.debug(f"[color-ignored] sid={_get_sid()} color={color!r}")


def handle_draw_card(*args):
    lobby = _lobby_for_caller()
    if lobby is None or not lobby.draw_card(_get_sid()):
        current_app.logger.debug(f"[draw-ignored] sid={_get_sid()}")


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``.

    Illegal or out-of-turn actions are dropped without a reply.
    """
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('joinGame', handle_join_game, namespace=namespace)
    socketio.on_event('playCard', handle_play_card, namespace=namespace)
    socketio.on_event('chooseColor', handle_choose_color, namespace=namespace)
    socketio.on_event('drawCard', handle_draw_card, namespace=namespace)
