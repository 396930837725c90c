import random
from collections import Counter

import pytest

from unolobby.services.games.deck import (
    CardType, Color, Deck, build_cards, new_card, shuffle,
)
from unolobby.services.games.errors import DeckExhaustedError


def _composition(cards):
    return Counter((c.type, c.color, c.value) for c in cards)


def test_fresh_deck_has_standard_108_cards():
    cards = build_cards()
    assert len(cards) == 108
    comp = _composition(cards)
    for color in Color:
        assert comp[(CardType.NUMBER, color, 0)] == 1
        for value in range(1, 10):
            assert comp[(CardType.NUMBER, color, value)] == 2
        for kind in (CardType.SKIP, CardType.REVERSE, CardType.PLUS2):
            assert comp[(kind, color, None)] == 2
    assert comp[(CardType.WILD, None, None)] == 4
    assert comp[(CardType.WILD4, None, None)] == 4


@pytest.mark.parametrize('seed', [0, 1, 42, 2024])
def test_shuffled_deck_keeps_composition(seed):
    deck = Deck(random.Random(seed))
    assert len(deck) == 108
    assert _composition(deck.draw_pile) == _composition(build_cards())


def test_card_ids_are_unique_and_increasing():
    first = build_cards()
    second = build_cards()
    ids = [c.id for c in first + second]
    assert len(set(ids)) == len(ids)
    assert min(c.id for c in second) > max(c.id for c in first)


def test_shuffle_is_a_permutation():
    cards = build_cards()
    shuffled = shuffle(list(cards), random.Random(3))
    assert sorted(c.id for c in shuffled) == sorted(c.id for c in cards)
    assert [c.id for c in shuffled] != [c.id for c in cards]


def test_draw_recycles_discards_except_top():
    draw_one = new_card(CardType.NUMBER, Color.RED, 1)
    discards = [new_card(CardType.NUMBER, Color.BLUE, v) for v in range(2, 7)]
    top = new_card(CardType.NUMBER, Color.GREEN, 9)
    deck = Deck(random.Random(1), cards=[draw_one])
    deck.discard_pile = discards + [top]

    assert deck.draw() is draw_one
    assert len(deck) == 0

    card = deck.draw()
    assert card in discards
    assert len(deck) == 4
    assert deck.discard_pile == [top]
    assert deck.top_card is top


def test_recycled_wilds_lose_their_chosen_color():
    wild = new_card(CardType.WILD).with_color(Color.BLUE)
    top = new_card(CardType.NUMBER, Color.RED, 4)
    deck = Deck(random.Random(1), cards=[])
    deck.discard_pile = [wild, top]

    drawn = deck.draw()
    assert drawn.id == wild.id
    assert drawn.color is None


def test_draw_raises_when_pool_is_empty():
    deck = Deck(random.Random(1), cards=[])
    deck.discard(new_card(CardType.NUMBER, Color.RED, 4))
    with pytest.raises(DeckExhaustedError):
        deck.draw()


def test_set_top_color_keeps_card_identity():
    deck = Deck(random.Random(1), cards=[])
    wild = new_card(CardType.WILD4)
    deck.discard(wild)
    resolved = deck.set_top_color(Color.YELLOW)
    assert resolved.id == wild.id
    assert resolved.type == CardType.WILD4
    assert deck.top_card.color == Color.YELLOW


def test_card_to_dict_uses_wire_names():
    assert new_card(CardType.WILD4).to_dict()['type'] == 'wild+4'
    data = new_card(CardType.NUMBER, Color.RED, 5).to_dict()
    assert data['color'] == 'red'
    assert data['value'] == 5


@pytest.mark.parametrize('seed', range(6))
def test_flip_never_opens_on_a_wild(seed):
    wilds = [new_card(CardType.WILD), new_card(CardType.WILD4)]
    deck = Deck(random.Random(seed), cards=wilds + build_cards()[:3])
    top = deck.flip()
    assert not top.type.is_wild
    assert deck.top_card is top
    assert len(deck) == 4
