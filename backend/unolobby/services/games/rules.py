from typing import Optional

from .deck import Card, CardType


def is_legal_play(card: Card, top_card: Optional[Card]) -> bool:
    """Return True if ``card`` may be played on ``top_card``.

    Wilds are always playable. Once a wild on top has a chosen color, only
    that color matches.
    """
    if top_card is None:
        return True
    if card.type.is_wild:
        return True
    if top_card.type.is_wild and top_card.color is not None:
        return card.color == top_card.color
    if card.color is not None and card.color == top_card.color:
        return True
    if card.type == CardType.NUMBER and top_card.type == CardType.NUMBER:
        return card.value == top_card.value
    return card.type != CardType.NUMBER and card.type == top_card.type
