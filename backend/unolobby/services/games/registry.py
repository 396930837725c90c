import itertools
import logging
import random
import threading
from typing import Callable, Dict, List, Optional

from unolobby.channel import Channel
from .leaderboard import Leaderboard
from .session import Lobby, Player


class SessionRegistry:
    """Owns every lobby of the process and the global leaderboard.

    Finished lobbies are kept but never matched again, since they are
    already full.
    """

    def __init__(
        self,
        channel: Channel,
        capacity: int = 4,
        hand_size: int = 7,
        turn_time: int = 30,
        tick_interval: float = 1.0,
        spawn: Optional[Callable] = None,
        sleep: Optional[Callable[[float], None]] = None,
        rng_factory: Optional[Callable[[], random.Random]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.channel = channel
        self.leaderboard = Leaderboard()
        self.lobbies: Dict[str, Lobby] = {}
        self._seats: Dict[str, str] = {}
        self._ids = itertools.count(1)
        self._lock = threading.RLock()
        self._rng_factory = rng_factory or random.Random
        self._logger = logger or logging.getLogger(__name__)
        self._lobby_options = dict(
            capacity=capacity,
            hand_size=hand_size,
            turn_time=turn_time,
            tick_interval=tick_interval,
            spawn=spawn,
            sleep=sleep,
        )

    def create_lobby(self) -> Lobby:
        with self._lock:
            lobby_id = str(next(self._ids))
            lobby = Lobby(
                lobby_id,
                self.channel,
                self.leaderboard,
                rng=self._rng_factory(),
                logger=self._logger,
                **self._lobby_options,
            )
            self.lobbies[lobby_id] = lobby
            self._logger.info(f"[lobby-create] lobby={lobby_id}")
            return lobby

    def find_open_lobby(self) -> Optional[Lobby]:
        with self._lock:
            for lobby in self.lobbies.values():
                if lobby.is_joinable:
                    return lobby
            return None

    def find_lobby_for(self, player_id: str) -> Optional[Lobby]:
        with self._lock:
            lobby_id = self._seats.get(player_id)
            return self.lobbies.get(lobby_id) if lobby_id else None

    def join_game(self, player_id: str, nickname: str) -> Optional[Player]:
        """Seat the caller in the first open lobby, creating one if needed.

        Returns None (and does nothing) if the caller is already seated.
        """
        with self._lock:
            if player_id in self._seats:
                return None
            lobby = self.find_open_lobby() or self.create_lobby()
            player = lobby.seat(player_id, nickname)
            if player is not None:
                self._seats[player_id] = lobby.id
            return player

    def summaries(self) -> List[dict]:
        with self._lock:
            return [lobby.summary() for lobby in self.lobbies.values()]
