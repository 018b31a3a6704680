"""
This module contains the Deck class and the deck factory functions used to
build and shuffle a standard 52-card deck.

>>> deck = Deck()
>>> deck.size
52
>>> deck.cards[-1]
Card(Suit.SPADES, Rank.KING)
>>> deck.shuffle(make_rng(42)).size
52
"""

import logging
import random
from typing import List, Optional, Sequence, Union

from klondike.common.card import Card, Rank, Suit

logger = logging.getLogger(__name__)

# Canonical suit order of a fresh deck
SUIT_ORDER = (Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES)

# Legacy "no seed" sentinel accepted alongside None
NO_SEED = -1


def build_ordered_deck() -> List[Card]:
    """
    Build the 52 cards of a fresh deck in canonical order.

    Card ``i`` has rank ``i % 13 + 1`` and suit ``SUIT_ORDER[i // 13]``, so
    the deck runs Ace to King of Clubs, then Diamonds, Hearts and Spades.

    >>> deck = build_ordered_deck()
    >>> deck[0], deck[51]
    (Card(Suit.CLUBS, Rank.ACE), Card(Suit.SPADES, Rank.KING))
    """
    return [Card(SUIT_ORDER[i // 13], Rank(i % 13 + 1)) for i in range(52)]


def make_rng(seed: Optional[int] = None) -> random.Random:
    """
    Create the random number generator for a game.

    A seed gives a reproducible sequence; ``None`` or ``-1`` gives a fresh,
    nondeterministic one.
    """
    if seed is None or seed == NO_SEED:
        return random.Random()
    return random.Random(seed)


def shuffle(deck: List[Card], rng: random.Random) -> List[Card]:
    """
    Shuffle a deck with a Fisher-Yates emit shuffle.

    Working from the last slot down, a card is drawn uniformly from the
    remaining slots ``[0, i]`` and emitted, and the card in slot ``i`` takes
    its place. The input list is consumed; the emitted order is returned.

    :param deck: The cards to shuffle.
    :param rng: Random number generator to draw from.
    :return: The cards in shuffled order.
    """
    shuffled = []
    for i in range(len(deck) - 1, -1, -1):
        j = rng.randrange(i + 1)
        shuffled.append(deck[j])
        deck[j] = deck[i]
    del deck[:]
    return shuffled


class Deck:
    """
    A full deck of cards, as it comes out of the box and onto the stock.
    """

    def __init__(self, cards: Union[Sequence[Card], None] = None):
        """
        Initialize a Deck instance.

        :param cards: A list of Card instances to populate the deck (optional).
                      If not provided, a canonical ordered deck will be constructed.
        >>> deck = Deck()
        >>> deck.size
        52
        """
        if cards is None:
            self.cards: List[Card] = build_ordered_deck()
        else:
            self.cards = list(cards)

    def shuffle(self, rng: Optional[random.Random] = None) -> "Deck":
        """
        Shuffle the cards in the deck.

        :param rng: Random number generator to use (optional). A fresh
                    unseeded generator is used when omitted.
        :return: The deck itself, so a new game can write
                 ``Deck().shuffle(rng).cards``.
        >>> deck = Deck()
        >>> original_order = deck.cards.copy()
        >>> _ = deck.shuffle(make_rng(42))
        >>> sorted(deck.cards, key=repr) == sorted(original_order, key=repr)
        True
        """
        self.cards = shuffle(self.cards, rng or make_rng())
        logger.debug("Shuffled %d cards", len(self.cards))
        return self

    @property
    def size(self) -> int:
        """
        Return the number of cards in the deck.
        """
        return len(self.cards)

    def __repr__(self) -> str:
        return f"Deck({[repr(card) for card in self.cards]})"
