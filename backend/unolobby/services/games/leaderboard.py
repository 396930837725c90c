import threading
from typing import Dict


class Leaderboard:
    """Process-wide nickname -> win count. In memory only; never decremented."""

    def __init__(self):
        self._wins: Dict[str, int] = {}
        self._lock = threading.Lock()

    def record_win(self, nickname: str) -> Dict[str, int]:
        with self._lock:
            self._wins[nickname] = self._wins.get(nickname, 0) + 1
            return dict(self._wins)

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._wins)
