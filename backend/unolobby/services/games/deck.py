"""Card model and the draw/discard piles of a single lobby."""

import dataclasses
import itertools
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .errors import DeckExhaustedError


class Color(str, Enum):
    RED = 'red'
    GREEN = 'green'
    BLUE = 'blue'
    YELLOW = 'yellow'


class CardType(str, Enum):
    NUMBER = 'number'
    SKIP = 'skip'
    REVERSE = 'reverse'
    PLUS2 = 'plus2'
    WILD = 'wild'
    WILD4 = 'wild+4'

    @property
    def is_wild(self) -> bool:
        return self in (CardType.WILD, CardType.WILD4)


# Card ids are unique for the whole process, not just per deck.
_card_ids = itertools.count()


@dataclass(frozen=True)
class Card:
    id: int
    type: CardType
    color: Optional[Color] = None
    value: Optional[int] = None

    def with_color(self, color: Optional[Color]) -> 'Card':
        return dataclasses.replace(self, color=color)

    def to_dict(self):
        return {
            'id': self.id,
            'type': self.type.value,
            'color': self.color.value if self.color else None,
            'value': self.value,
        }


def new_card(card_type: CardType, color: Optional[Color] = None, value: Optional[int] = None) -> Card:
    return Card(id=next(_card_ids), type=card_type, color=color, value=value)


def build_cards() -> List[Card]:
    """Build the standard 108-card composition, unshuffled.

    Per color: one 0, two each of 1-9, two skip, two reverse, two plus2.
    Plus four wild and four wild+4.
    """
    cards = []
    for color in Color:
        cards.append(new_card(CardType.NUMBER, color, 0))
        for _ in range(2):
            for value in range(1, 10):
                cards.append(new_card(CardType.NUMBER, color, value))
            cards.append(new_card(CardType.SKIP, color))
            cards.append(new_card(CardType.REVERSE, color))
            cards.append(new_card(CardType.PLUS2, color))
    for _ in range(4):
        cards.append(new_card(CardType.WILD))
        cards.append(new_card(CardType.WILD4))
    return cards


def shuffle(cards: list, rng: Optional[random.Random] = None) -> list:
    """Fisher-Yates shuffle in place; returns the same list."""
    rng = rng or random
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


class Deck:
    """Draw pile plus discard pile. The last discard is the top card."""

    def __init__(self, rng: Optional[random.Random] = None, cards: Optional[List[Card]] = None):
        self.rng = rng or random.Random()
        self.draw_pile: List[Card] = shuffle(build_cards() if cards is None else list(cards), self.rng)
        self.discard_pile: List[Card] = []

    @property
    def top_card(self) -> Optional[Card]:
        return self.discard_pile[-1] if self.discard_pile else None

    def discard(self, card: Card) -> None:
        self.discard_pile.append(card)

    def set_top_color(self, color: Color) -> Card:
        resolved = self.discard_pile[-1].with_color(color)
        self.discard_pile[-1] = resolved
        return resolved

    def recycle(self) -> None:
        """Move every discard except the top card back into the draw pile and reshuffle."""
        if len(self.discard_pile) <= 1:
            return
        top = self.discard_pile[-1]
        recycled = [c.with_color(None) if c.type.is_wild else c for c in self.discard_pile[:-1]]
        self.discard_pile = [top]
        self.draw_pile.extend(recycled)
        shuffle(self.draw_pile, self.rng)

    def flip(self) -> Card:
        """Turn over the opening top card. Wilds go back into the pile."""
        card = self.draw()
        while card.type.is_wild:
            self.draw_pile.append(card)
            shuffle(self.draw_pile, self.rng)
            card = self.draw()
        self.discard(card)
        return card

    def draw(self) -> Card:
        if not self.draw_pile:
            self.recycle()
        if not self.draw_pile:
            raise DeckExhaustedError('no cards left in draw or discard pile')
        return self.draw_pile.pop()

    def __len__(self):
        return len(self.draw_pile)
