"""One lobby: seating, dealing, the three player actions and the turn countdown.

Every public mutator takes ``self.lock`` and returns True only when the
action was accepted. Rejected actions leave state untouched and send
nothing; callers are expected to stay silent about them.
"""

import logging
import random
import threading
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from unolobby.channel import Channel
from .deck import Card, CardType, Color, Deck
from .errors import DeckExhaustedError
from .leaderboard import Leaderboard
from .rules import is_legal_play
from .scheduler import Countdown
from .turns import TurnController


@dataclass
class Player:
    id: str
    nickname: str
    hand: List[Card] = field(default_factory=list)
    is_bot: bool = False

    def find_card(self, card_id) -> Optional[Card]:
        for card in self.hand:
            if card.id == card_id:
                return card
        return None


def parse_color(raw) -> Optional[Color]:
    if isinstance(raw, dict):
        raw = raw.get('color')
    if isinstance(raw, Color):
        return raw
    if not isinstance(raw, str):
        return None
    try:
        return Color(raw.strip().lower())
    except ValueError:
        return None


def _card_id(payload):
    raw = payload.get('id') if isinstance(payload, dict) else None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw)
    return None


class Lobby:
    def __init__(
        self,
        lobby_id: str,
        channel: Channel,
        leaderboard: Leaderboard,
        capacity: int = 4,
        hand_size: int = 7,
        turn_time: int = 30,
        tick_interval: float = 1.0,
        spawn: Optional[Callable] = None,
        sleep: Optional[Callable[[float], None]] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.id = lobby_id
        self.channel = channel
        self.leaderboard = leaderboard
        self.capacity = capacity
        self.hand_size = hand_size
        self.logger = logger or logging.getLogger(__name__)
        self.players: List[Player] = []
        self.deck = Deck(rng)
        self.turns = TurnController(capacity)
        self.started = False
        self.winner: Optional[str] = None
        self.awaiting_color = False
        self.lock = threading.RLock()
        self.countdown = Countdown(
            self.tick,
            budget=turn_time,
            interval=tick_interval,
            spawn=spawn,
            sleep=sleep,
            logger=self.logger,
            label=lobby_id,
        )

    # -- read side ---------------------------------------------------------

    @property
    def top_card(self) -> Optional[Card]:
        return self.deck.top_card

    @property
    def current_player(self) -> Optional[Player]:
        if not self.players:
            return None
        return self.players[self.turns.index]

    @property
    def turn_time(self) -> int:
        return self.countdown.remaining

    @property
    def is_joinable(self) -> bool:
        return not self.started and self.winner is None and len(self.players) < self.capacity

    def get_player(self, player_id: str) -> Optional[Player]:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def view_for(self, player: Player) -> dict:
        top = self.top_card
        can_act = self.started and not self.awaiting_color and self.current_player is player
        return {
            'id': self.id,
            'players': [
                {'nickname': p.nickname, 'handCount': len(p.hand), 'isBot': p.is_bot}
                for p in self.players
            ],
            'hand': [
                dict(card.to_dict(), playable=can_act and is_legal_play(card, top))
                for card in player.hand
            ],
            'topCard': top.to_dict() if top else None,
            'currentPlayer': self.turns.index,
            'direction': self.turns.direction,
            'started': self.started,
            'winner': self.winner,
            'awaitingColor': self.awaiting_color,
            'leaderboard': self.leaderboard.snapshot(),
            'turnTime': self.countdown.remaining,
        }

    def summary(self) -> dict:
        return {
            'id': self.id,
            'player_count': len(self.players),
            'capacity': self.capacity,
            'started': self.started,
            'winner': self.winner,
            'draw_pile': len(self.deck),
        }

    def broadcast_state(self) -> None:
        for p in self.players:
            self.channel.send(p.id, 'gameState', self.view_for(p))

    # -- player actions ----------------------------------------------------

    def seat(self, player_id: str, nickname: str) -> Optional[Player]:
        with self.lock:
            if not self.is_joinable or self.get_player(player_id):
                return None
            player = Player(id=player_id, nickname=nickname)
            self.players.append(player)
            self.logger.info(f"[join] lobby={self.id} player={player_id} nickname={nickname} seats={len(self.players)}/{self.capacity}")
            if len(self.players) == self.capacity:
                self._start()
            self.broadcast_state()
            return player

    def play_card(self, player_id: str, payload) -> bool:
        with self.lock:
            player = self._acting_player(player_id)
            if player is None or self.awaiting_color:
                return False
            card = player.find_card(_card_id(payload))
            if card is None or not is_legal_play(card, self.top_card):
                return False

            player.hand.remove(card)
            self.deck.discard(card)
            self.logger.debug(f"[play] lobby={self.id} player={player_id} card={card.to_dict()}")

            if not player.hand:
                self._finish(player)
            elif card.type.is_wild:
                self.awaiting_color = True
            else:
                if card.type == CardType.REVERSE:
                    self.turns.reverse()
                elif card.type == CardType.SKIP:
                    self.turns.advance()
                elif card.type == CardType.PLUS2:
                    self.turns.advance()
                    self._deal(self.current_player, 2)
                self._advance_turn()
            self.broadcast_state()
            return True

    def draw_card(self, player_id: str) -> bool:
        with self.lock:
            player = self._acting_player(player_id)
            if player is None or self.awaiting_color:
                return False
            self._deal(player, 1)
            self._advance_turn()
            self.broadcast_state()
            return True

    def choose_color(self, player_id: str, raw_color) -> bool:
        with self.lock:
            player = self._acting_player(player_id)
            color = parse_color(raw_color)
            if player is None or not self.awaiting_color or color is None:
                return False
            self._resolve_color(color)
            self.broadcast_state()
            return True

    def disconnect(self, player_id: str) -> bool:
        with self.lock:
            player = self.get_player(player_id)
            if player is None:
                return False
            player.is_bot = True
            self.logger.info(f"[disconnect] lobby={self.id} player={player_id} nickname={player.nickname}")
            self.broadcast_state()
            return True

    def tick(self, generation: Optional[int] = None) -> bool:
        """One countdown second. Returns False once this tick loop is stale."""
        with self.lock:
            if not self.started:
                return False
            if generation is not None and generation != self.countdown.generation:
                return False
            if self.countdown.decrement():
                self._on_timeout()
            self.broadcast_state()
            return True

    # -- internals ---------------------------------------------------------

    def _acting_player(self, player_id: str) -> Optional[Player]:
        if not self.started:
            return None
        current = self.current_player
        if current is None or current.id != player_id:
            return None
        return current

    def _start(self) -> None:
        self.started = True
        for p in self.players:
            self._deal(p, self.hand_size)
        self.deck.flip()
        self.countdown.restart()
        self.logger.info(f"[lobby-start] lobby={self.id} top={self.top_card.to_dict()}")

    def _deal(self, player: Player, count: int) -> int:
        dealt = 0
        for _ in range(count):
            try:
                player.hand.append(self.deck.draw())
            except DeckExhaustedError:
                self.logger.warning(f"[deck-exhausted] lobby={self.id} player={player.id} wanted={count} dealt={dealt}")
                break
            dealt += 1
        return dealt

    def _advance_turn(self) -> None:
        self.turns.advance()
        self.countdown.restart()

    def _resolve_color(self, color: Color) -> None:
        resolved = self.deck.set_top_color(color)
        self.awaiting_color = False
        if resolved.type == CardType.WILD4:
            self.turns.advance()
            self._deal(self.current_player, 4)
        self._advance_turn()

    def _on_timeout(self) -> None:
        player = self.current_player
        self.logger.info(f"[timer-fire] lobby={self.id} player={player.id} awaiting_color={self.awaiting_color}")
        if self.awaiting_color:
            self._resolve_color(self._auto_color(player))
        else:
            self._deal(player, 1)
            self._advance_turn()

    @staticmethod
    def _auto_color(player: Player) -> Color:
        counts = Counter(card.color for card in player.hand if card.color is not None)
        if not counts:
            return Color.RED
        return max(Color, key=lambda c: counts.get(c, 0))

    def _finish(self, player: Player) -> None:
        self.winner = player.nickname
        self.started = False
        self.awaiting_color = False
        self.countdown.cancel()
        self.logger.info(f"[win] lobby={self.id} winner={player.nickname} bot={player.is_bot}")
        standings = None
        if not player.is_bot:
            standings = self.leaderboard.record_win(player.nickname)
        for p in self.players:
            self.channel.send(p.id, 'gameOver', {'winner': player.nickname})
        if standings is not None:
            self.channel.broadcast('globalLeaderboard', standings)
