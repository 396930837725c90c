class GameError(Exception):
    """Base class for game-domain failures."""


class DeckExhaustedError(GameError):
    """Raised when neither the draw pile nor the discard pile can supply a card."""
