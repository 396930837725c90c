"""Game domain services: deck, rules, turns, countdown, lobbies.

This package contains the card-game state machine. Socket handlers and
HTTP routes call into it; nothing here imports Flask, so transport
concerns stay on the other side of the ``Channel`` seam.
"""

from .deck import Card, CardType, Color, Deck
from .errors import DeckExhaustedError, GameError
from .registry import SessionRegistry
from .rules import is_legal_play
from .session import Lobby, Player

__all__ = [
    'Card', 'CardType', 'Color', 'Deck',
    'DeckExhaustedError', 'GameError',
    'SessionRegistry', 'Lobby', 'Player',
    'is_legal_play',
]
