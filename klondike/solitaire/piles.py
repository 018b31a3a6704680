"""
This module contains the card piles of a Klondike layout.

All piles share stack discipline: cards are pushed onto and popped off the
top, which is the end of the underlying list. Contents are exposed as tuples
ordered bottom to top, so readers can draw a pile without being able to
change it. Only the game controller mutates piles once a game has started.

Classes:

CardPile: Base pile with push/pop/peek.
StockPile: The face-down draw pile.
DiscardPile: The face-up waste pile fed from the stock.
FoundationPile: A pile built up from Ace to King in one suit.
TableauColumn: A column made of a face-down and a face-up sub-pile.
"""
from typing import Iterator, Optional, Tuple

from klondike.common.card import Card, Suit
from klondike.solitaire.constants import FOUNDATION_SIZE


class CardPile:
    """
    An ordered stack of cards.
    """

    def __init__(self, cards=None):
        self._cards = list(cards) if cards else []

    @property
    def cards(self) -> Tuple[Card, ...]:
        """Returns the cards in the pile, bottom first."""
        return tuple(self._cards)

    def top_to_bottom(self) -> Tuple[Card, ...]:
        """Returns the cards in the pile, top first."""
        return tuple(reversed(self._cards))

    def push(self, card: Card) -> None:
        """
        Puts a card on top of the pile.

        Args:
            card: The card to add.
        """
        self._cards.append(card)

    def pop(self) -> Card:
        """
        Takes the top card off the pile.

        Raises:
            IndexError: If the pile is empty.
        """
        if not self._cards:
            raise IndexError(f"pop from empty {type(self).__name__}")
        return self._cards.pop()

    def peek(self) -> Optional[Card]:
        """Returns the top card without removing it, or None if the pile is empty."""
        return self._cards[-1] if self._cards else None

    def is_empty(self) -> bool:
        return not self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._cards!r})"

    def __str__(self) -> str:
        return ", ".join(str(card) for card in self._cards)


class StockPile(CardPile):
    """The face-down draw pile."""


class DiscardPile(CardPile):
    """
    The face-up waste pile. Its top card is playable.
    """

    def __init__(self, cards=None):
        super().__init__(cards)
        self.is_selected = False


class FoundationPile(CardPile):
    """
    A pile built up from Ace to King of a single suit.
    """

    @property
    def suit(self) -> Optional[Suit]:
        """The suit of the pile, taken from its Ace; None while empty."""
        return self._cards[0].suit if self._cards else None

    def is_complete(self) -> bool:
        return len(self._cards) == FOUNDATION_SIZE


class TableauColumn:
    """
    A tableau column: hidden cards at the bottom, a playable run on top.

    ``number_selected`` is how many of the top face-up cards are currently
    picked up as one movable run; zero means the column is not selected.
    """

    def __init__(self, face_down=None, face_up=None):
        self.face_down = CardPile(face_down)
        self.face_up = CardPile(face_up)
        self.number_selected = 0

    @property
    def is_selected(self) -> bool:
        return self.number_selected > 0

    @property
    def selected_cards(self) -> Tuple[Card, ...]:
        """The picked-up run, bottom first."""
        if self.number_selected <= 0:
            return ()
        return self.face_up.cards[-self.number_selected :]

    def reveal(self) -> Optional[Card]:
        """
        Turns the top hidden card face up when no face-up card is left.

        Returns:
            The revealed card, or None if nothing was flipped.
        """
        if self.face_up.is_empty() and not self.face_down.is_empty():
            card = self.face_down.pop()
            self.face_up.push(card)
            return card
        return None

    def is_empty(self) -> bool:
        return self.face_down.is_empty() and self.face_up.is_empty()

    def __len__(self) -> int:
        return len(self.face_down) + len(self.face_up)

    def __repr__(self) -> str:
        return (
            f"TableauColumn(face_down={list(self.face_down.cards)!r}, "
            f"face_up={list(self.face_up.cards)!r})"
        )

    def __str__(self) -> str:
        hidden = "## " * len(self.face_down)
        return f"{hidden}{self.face_up}".strip()
