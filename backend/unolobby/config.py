import os


def _env_bool(name, default):
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Process startup
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Comma separated; '*' allows any origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    # Lobby shape
    LOBBY_CAPACITY = int(os.environ.get('LOBBY_CAPACITY', '4'))
    HAND_SIZE = int(os.environ.get('HAND_SIZE', '7'))
    # Per-turn countdown (seconds)
    TURN_TIME_SEC = int(os.environ.get('TURN_TIME_SEC', '30'))
    TICK_INTERVAL_SEC = float(os.environ.get('TICK_INTERVAL_SEC', '1'))
    TURN_TIMER_ENABLED = _env_bool('TURN_TIMER_ENABLED', True)
