"""
Klondike solitaire rules engine.

Deck construction and shuffling, the deal, the selection state machine,
move legality and win detection. Rendering and input handling are left to
callers, which drive a `Game` and read its piles or snapshots.
"""

from klondike.common.card import Card, Color, Rank, Suit
from klondike.common.deck import Deck, build_ordered_deck, make_rng, shuffle
from klondike.solitaire import (
    Board,
    BoardState,
    DiscardPile,
    FoundationPile,
    Game,
    KlondikeRules,
    MoveResult,
    StockPile,
    TableauColumn,
)

__all__ = [
    "Board",
    "BoardState",
    "Card",
    "Color",
    "Deck",
    "DiscardPile",
    "FoundationPile",
    "Game",
    "KlondikeRules",
    "MoveResult",
    "Rank",
    "StockPile",
    "Suit",
    "TableauColumn",
    "build_ordered_deck",
    "make_rng",
    "shuffle",
]
